"""AST Walker Recipebook: interactive examples for protoast tree traversal."""

import marimo

__generated_with = "0.19.11"
app = marimo.App()


@app.cell
def _(mo):
    mo.md("""
    # AST Walker Recipebook

    Interactive recipes demonstrating how to traverse and analyze compiled
    protobuf schemas using **protoast**'s `Visitor` pattern and `walk_nodes()`
    generator.

    The recipes share one small descriptor set, built in code so the notebook
    runs without `protoc`. In a real plugin the same tree comes from
    `build_request(CodeGeneratorRequest.FromString(sys.stdin.buffer.read()))`.

    **How to use this notebook:**

    - `marimo run recipes/ast_walker.py`: read-only app mode
    - `marimo edit recipes/ast_walker.py`: interactive editing mode (tweak the schema, see results update)
    """)
    return


@app.cell
def _():
    import marimo as mo
    from google.protobuf import descriptor_pb2

    from protoast import Field, Visitor, build, walk, walk_nodes

    return Field, Visitor, build, descriptor_pb2, mo, walk, walk_nodes


@app.cell
def _(build, descriptor_pb2):
    # --- Shared schema: a tiny shop with an unused import ---
    _F = descriptor_pb2.FieldDescriptorProto

    _money = descriptor_pb2.FileDescriptorProto(name="common/money.proto", package="common", syntax="proto3")
    _money.message_type.add(name="Money").field.add(name="units", number=1, type=_F.TYPE_INT64, label=_F.LABEL_OPTIONAL)

    _audit = descriptor_pb2.FileDescriptorProto(name="common/audit.proto", package="common", syntax="proto3")
    _audit.message_type.add(name="AuditLog")

    _shop = descriptor_pb2.FileDescriptorProto(
        name="shop/order.proto",
        package="shop",
        syntax="proto3",
        dependency=["common/money.proto", "common/audit.proto"],
    )
    _order = _shop.message_type.add(name="Order")
    _order.field.add(name="order_id", number=1, type=_F.TYPE_STRING, label=_F.LABEL_OPTIONAL)
    _order.field.add(name="card", number=2, type=_F.TYPE_STRING, label=_F.LABEL_OPTIONAL, oneof_index=0)
    _order.field.add(
        name="voucher",
        number=3,
        type=_F.TYPE_MESSAGE,
        type_name=".common.Money",
        label=_F.LABEL_OPTIONAL,
        oneof_index=0,
    )
    _order.field.add(
        name="gift_note",
        number=4,
        type=_F.TYPE_STRING,
        label=_F.LABEL_OPTIONAL,
        oneof_index=1,
        proto3_optional=True,
    )
    _order.field.add(
        name="line_prices",
        number=5,
        type=_F.TYPE_MESSAGE,
        type_name=".shop.Order.LinePricesEntry",
        label=_F.LABEL_REPEATED,
    )
    _order.oneof_decl.add(name="payment")
    _order.oneof_decl.add(name="_gift_note")
    _entry = _order.nested_type.add(name="LinePricesEntry")
    _entry.options.map_entry = True
    _entry.field.add(name="key", number=1, type=_F.TYPE_STRING, label=_F.LABEL_OPTIONAL)
    _entry.field.add(name="value", number=2, type=_F.TYPE_MESSAGE, type_name=".common.Money", label=_F.LABEL_OPTIONAL)

    _service = _shop.service.add(name="OrderDesk")
    _service.method.add(name="PlaceOrder", input_type=".shop.Order", output_type=".shop.Order")
    _service.method.add(name="WatchOrders", input_type=".shop.Order", output_type=".shop.Order", server_streaming=True)

    _info = _shop.source_code_info
    _info.location.add(path=[4, 0], span=[4, 0, 20, 1], leading_comments=" A customer order.\n")
    _info.location.add(path=[4, 0, 2, 0], span=[5, 2, 24], trailing_comments=" Opaque order id.\n")
    _info.location.add(path=[4, 0, 8, 0], span=[6, 2, 9, 3], leading_comments=" How the order was paid.\n")
    _info.location.add(path=[6, 0, 2, 1], span=[22, 2, 70], leading_comments=" Streams order updates.\n")

    ast = build([_money, _audit, _shop], targets=["shop/order.proto"])
    return (ast,)


@app.cell
def _(Visitor, ast, mo, walk):
    # --- Recipe: Report oneofs ---
    class _OneOfReport(Visitor):
        def __init__(self):
            self.rows = []

        def visit_oneof(self, node):
            _imports = ", ".join(f"`{f.path}`" for f in node.imports()) or "none"
            _fields = ", ".join(f"`{f.name}`" for f in node.fields)
            self.rows.append(f"| `{node.fully_qualified_name}` | {node.is_synthetic()} | {_fields} | {_imports} |")
            return True

    _report = _OneOfReport()
    walk(_report, ast)

    mo.md(
        f"""
        ## Recipe 1: Report Oneofs

        Uses a `Visitor` subclass with `visit_oneof` to list every oneof, whether
        the compiler synthesized it for a proto3 `optional` field, and which
        files its member fields need.

        | Oneof | Synthetic | Fields | Imports |
        |-------|-----------|--------|---------|
        """
        + "\n".join(_report.rows)
    )
    return


@app.cell
def _(ast, mo):
    # --- Recipe: Find unused imports ---
    _rows = []
    for _file in ast.targets.values():
        _used = _file.imports()
        for _dep in _file.dependencies:
            _status = "used" if any(_dep is _u for _u in _used) else "**unused**"
            _rows.append(f"| `{_file.path}` | `{_dep.path}` | {_status} |")

    mo.md(
        f"""
        ## Recipe 2: Find Unused Imports

        Compares each build target's declared `dependencies` with `imports()`,
        the files its declarations actually reference.

        | File | Dependency | Status |
        |------|------------|--------|
        """
        + "\n".join(_rows)
    )
    return


@app.cell
def _(Field, ast, descriptor_pb2, mo, walk_nodes):
    # --- Recipe: Describe field types ---
    def _describe(field_type):
        if field_type.is_map:
            return f"map<{_describe(field_type.key)}, {_describe(field_type.value)}>"
        if field_type.embed is not None:
            _name = field_type.embed.fully_qualified_name
        elif field_type.enum is not None:
            _name = field_type.enum.fully_qualified_name
        else:
            _name = descriptor_pb2.FieldDescriptorProto.Type.Name(field_type.proto_type).removeprefix("TYPE_").lower()
        return f"repeated {_name}" if field_type.is_repeated else _name

    _rows = [
        f"| `{n.fully_qualified_name}` | `{_describe(n.type)}` | {n.has_optional_keyword} |"
        for n in walk_nodes(ast.files["shop/order.proto"])
        if isinstance(n, Field) and not n.message.is_map_entry
    ]

    mo.md(
        f"""
        ## Recipe 3: Describe Field Types

        Uses `walk_nodes()` to reach every field, and the resolved `FieldType` to
        render scalars, message references and maps (the compiler-generated
        `*Entry` messages are skipped).

        | Field | Type | `optional` keyword |
        |-------|------|--------------------|
        """
        + "\n".join(_rows)
    )
    return


@app.cell
def _(ast, mo, walk_nodes):
    # --- Recipe: Extract doc comments ---
    _rows = []
    for _node in walk_nodes(ast.files["shop/order.proto"]):
        _info = _node.source_code_info
        if _info is None:
            continue
        _comment = (_info.leading_comments or _info.trailing_comments).strip()
        _rows.append(f"| `{_node.fully_qualified_name}` | {_info.span[0] + 1} | {_comment} |")

    mo.md(
        f"""
        ## Recipe 4: Extract Doc Comments

        Reads the `source_code_info` attached to each node to pull comments out
        of the schema, e.g. for generated docstrings.

        | Node | Line | Comment |
        |------|------|---------|
        """
        + "\n".join(_rows)
    )
    return


@app.cell
def _(ast, mo):
    # --- Recipe: Generate method stubs ---
    _stubs = []
    for _service in ast.files["shop/order.proto"].services:
        for _method in _service.methods:
            _result = f"Iterator[{_method.output.name}]" if _method.server_streaming else _method.output.name
            _stubs.append(f"def {_method.name.lower_snake_case()}(request: {_method.input.name}) -> {_result}: ...")

    mo.md(
        f"""
        ## Recipe 5: Generate Method Stubs

        Walks each service's methods and uses the `Name` casing helpers to turn
        `UpperCamelCase` RPC names into Python function names.

        ```python
        {chr(10).join(_stubs)}
        ```
        """
    )
    return


if __name__ == "__main__":
    app.run()
