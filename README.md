# pocsema

`pocsema` checks the meaning of programs in a small statically typed language. The language has `int`, `float`, `char`, `bool` and `void` values, arrays and pointers. You build a syntax tree from the classes in `pocsema.ast` and pass it to `pocsema.semantic.analyze`. The analysis then:

- collects the top-level variables and functions into a global scope and reports duplicate declarations,
- checks the types of expressions, initializers, assignments, calls, conditions and returns,
- follows control flow to find non-void functions that may end without returning, and code placed after a statement that always returns,
- reports `break` and `continue` outside a loop, and `return` outside a function,
- requires that global variables are initialised with a literal.

Every problem becomes a `SemanticError` that holds a kind, a line, a column and a message. The analysis does not stop at the first error; it collects them all.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building a tree

The nodes are dataclasses in `pocsema.ast`. Each node takes the keyword-only arguments `line` and `column`, which both default to 0. The program `func main() -> int { ret 1; }` is built like this:

```python
from pocsema.ast import (
    Program, FuncDecl, Block, Return, IntLiteral, TypeName, TypeNameKind,
)

program = Program(items=[
    FuncDecl(
        name="main",
        params=[],
        return_type=TypeName(kind=TypeNameKind.INT, name="int", line=1, column=16),
        body=Block(items=[Return(value=IntLiteral(value=1))]),
        line=1,
        column=1,
    )
])
```

Operators are enums whose values are their spelling in source: `BinaryOp`, `UnaryOp` and `AssignOp`. Types are written with `TypeName`, `TypeArray` (an element type and an optional size expression) and `TypePointer`.

`Node.children()` yields the direct child nodes of a node. `walk(node)` yields the node and all of its descendants in pre-order.

## Analysing

```python
from pocsema.semantic import analyze

result = analyze(program)
if result.ok():
    print("no semantic errors")
else:
    for error in result.errors:
        print(error)   # "<Kind> at line <n>, column <m>: <message>"
```

`result.global_scope` is a `pocsema.scope.Scope` that holds the program's top-level variables and functions. Names declared inside blocks and function bodies do not stay in it.

The steps can also be run one at a time:

- `pocsema.semantic.collect_symbols(node, scope, errors)` declares names into a scope.
- `pocsema.semantic.Validator` checks statements. `validate(node, scope)` returns a `Flow`, either `CONTINUES` or `RETURNS`.
- `pocsema.checker.ExpressionChecker` works out expression types with `check(node, scope)` and `check_assignment_target(node, scope)`. It adds its diagnostics to its `errors` list.

### Error kinds

`pocsema.errors.ErrorKind` has four members. `display_name()` returns the name of each:

| member        | display name       | examples                                                      |
|---------------|--------------------|---------------------------------------------------------------|
| `TYPE`        | `TypeError`        | incompatible initializer, wrong argument type, missing return |
| `NAME`        | `NameError`        | undeclared variable or function                               |
| `DECLARATION` | `DeclarationError` | duplicate declaration in the same scope                       |
| `DEVELOPER`   | `DeveloperError`   | unreachable code, `break`/`continue` outside a loop           |

## Types and scopes directly

```python
from pocsema.types import TypeKind, primitive, pointer_to, array_of, is_compatible

int_t = primitive(TypeKind.INT)
print(pointer_to(primitive(TypeKind.CHAR)).name())      # "pointer"
print(is_compatible(primitive(TypeKind.CHAR), int_t))     # True: an int may be stored in a char
print(array_of(int_t, 3).matches(array_of(int_t, 4)))     # False
```

`type_from_ast(node)` turns a type node into a `SemanticType`. It returns the `ERROR` kind for anything it does not recognise.

```python
from pocsema.scope import Scope, Symbol
from pocsema.types import TypeKind, primitive

globals_ = Scope(None)
globals_.declare(Symbol.variable("x", primitive(TypeKind.INT)))
inner = Scope(globals_)
print(inner.lookup("x") is not None, inner.lookup_current("x"))   # True None
print("x" in globals_, "x" in inner)                              # True False
```

`Scope.declare` returns `False` and leaves the scope unchanged when the name is already declared in that same scope. A nested scope may shadow a name from an outer scope. Iterating over a scope yields only its own symbols, in the order they were declared.

## What this package does not do

`pocsema` reads no source text. It has no lexer and no parser, so you must build the syntax tree yourself. It generates no code and has no command-line program. Its output is the list of diagnostics and the global scope.