"""Quickstart example for combjson.

This example demonstrates parsing JSON, reading the diagnostic stack when a
document is invalid, and serializing the AST back to text.

Note: parse() returns errors as values; parse_json() and loads() raise
JsonSyntaxError instead. Pick whichever suits the call site.
"""

from combjson import JsonParser, JsonSyntaxError, ParseError, dumps, loads, parse_json
from combjson.diagnostics import DiagnosticFormatter, OutputFormat
from combjson.syntax import serialize

# Example 1: Plain Python values
print("=" * 50)
print("Example 1: loads / dumps")
print("=" * 50)

data = loads('{"name": "combjson", "tags": ["json", "parser"], "stars": 42}')
print(data)
# Output: {'name': 'combjson', 'tags': ['json', 'parser'], 'stars': 42.0}

print(dumps(data, sort_keys=True))
# Output: {"name": "combjson", "stars": 42, "tags": ["json", "parser"]}

# Example 2: The AST
print("\n" + "=" * 50)
print("Example 2: Working with the AST")
print("=" * 50)

document = parse_json('{"a": [1, 2.5, null], "a": true}')
print(document)
# Output: JsonObject(members=mappingproxy({'a': JsonBool(value=True)}))
print(serialize(document, indent=2))

# Example 3: Errors as values
print("\n" + "=" * 50)
print("Example 3: Diagnostic stacks")
print("=" * 50)

source = """{
  "server": {
    "host": "localhost",
    "port" 8080
  }
}"""

result = JsonParser().parse(source)
if isinstance(result, ParseError):
    print(result.format_error())
    # Output: expected ':' at line 4, column 12 (while parsing value for key "port"
    #         in object in value for key "server" in object)
    print()
    print(result.format_with_context(context_lines=1))
    print()
    print("Label chain (outermost first):", " > ".join(result.context))

# Example 4: Machine-readable diagnostics
print("\n" + "=" * 50)
print("Example 4: Formatter output")
print("=" * 50)

result = JsonParser().parse("[1, 2,]")
if isinstance(result, ParseError):
    diagnostic = result.to_diagnostic()
    print(DiagnosticFormatter().format(diagnostic))
    print(DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic))

# Example 5: Raising API and limits
print("\n" + "=" * 50)
print("Example 5: Exceptions and limits")
print("=" * 50)

try:
    loads("[1, 2] [3]")
except JsonSyntaxError as e:
    print(f"JsonSyntaxError at {e.line}:{e.column}: {e}")

shallow = JsonParser(max_nesting_depth=2)
result = shallow.parse("[[[0]]]")
if isinstance(result, ParseError):
    print(result.format_error())
    # Output: maximum nesting depth (2) exceeded at line 1, column 3 (while parsing array in array)

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
