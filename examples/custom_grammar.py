"""Building a custom grammar with the combjson engine.

The engine is grammar-agnostic. This example builds a tiny arithmetic
expression language (integers, + - * /, parentheses) and shows that the same
diagnostic stacks come for free.
"""

from combjson.engine import (
    Parser,
    ParseError,
    char_in,
    choice,
    lazy,
    literal,
    run,
    take_while,
    take_while1,
)

spaces = take_while(str.isspace, name="spaces")


def token[T](parser: Parser[T]) -> Parser[T]:
    """Skip whitespace after parser."""
    return parser.skip(spaces)


integer = token(take_while1(str.isdigit, "digit")).map(int).describe("number")


def _fold(first: int, rest: list[tuple[str, int]]) -> int:
    total = first
    for op, operand in rest:
        match op:
            case "+":
                total += operand
            case "-":
                total -= operand
            case "*":
                total *= operand
            case "/":
                total //= operand
    return total


def _binary(operand: Parser[int], ops: str) -> Parser[int]:
    tail = (token(char_in(ops)) & operand.commit()).many()
    return (operand & tail).map(lambda pair: _fold(*pair))


expression: Parser[int] = lazy(lambda: _sum, name="expression")
group = token(literal("(")).then(expression.skip(token(literal(")"))).commit()).label("group")
atom = choice(integer, group)
_product = _binary(atom, "*/")
_sum = _binary(_product, "+-")

program = spaces.then(expression)

# Example 1: Evaluating expressions
print("=" * 50)
print("Example 1: Evaluation")
print("=" * 50)

for source in ("1 + 2 * 3", "(1 + 2) * 3", " 100 / (4 - 2) - 7 "):
    result = run(program, source)
    if not isinstance(result, ParseError):
        print(f"{source!r} = {result.value}")

# Example 2: Errors
print("\n" + "=" * 50)
print("Example 2: Errors")
print("=" * 50)

for source in ("1 +", "(1 + (2 * 3)", "2 * (3 + x)"):
    result = run(program, source)
    if isinstance(result, ParseError):
        print(f"{source!r}: {result.format_error()}")

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
