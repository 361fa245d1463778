"""
Example declaration tree for demos and tests.

Builds a small "widgets" package that exercises every kind of item, plus the
items the report must leave out (@internal, @alpha, unsupported names).
"""
from apisurface.documentation import Documentation, ParamDoc, ReleaseTag, text_block
from apisurface.model import (
    CONSTRUCTOR_NAME,
    AccessModifier,
    DeclarationKind,
    EnumType,
    EnumValue,
    Function,
    Member,
    Method,
    ModuleVariable,
    Namespace,
    Package,
    Parameter,
    Property,
    StructuredType,
)


def _doc(summary: str = "", release_tag: ReleaseTag = ReleaseTag.NONE, **kwargs) -> Documentation:
    return Documentation(summary=text_block(summary), release_tag=release_tag, **kwargs)


def build_widget_class() -> StructuredType:
    render = Method(
        name="render",
        documentation=_doc(
            "Renders the widget.",
            release_tag=ReleaseTag.PUBLIC,
            parameters={"x": ParamDoc(name="x", description=text_block("Horizontal offset."))},
            returns_message=text_block("The rendered markup."),
        ),
        signature="public render(x: number): string;",
        parameters=[Parameter(name="x", type="number")],
        return_type="string",
        access_modifier=AccessModifier.PUBLIC,
    )
    debug = Method(
        name="debug",
        documentation=_doc("Dumps internal state.", release_tag=ReleaseTag.INTERNAL),
        signature="public debug(): void;",
        return_type="void",
        access_modifier=AccessModifier.PUBLIC,
    )
    constructor = Method(
        name=CONSTRUCTOR_NAME,
        documentation=_doc("Creates a widget."),
        signature="constructor(options?: IWidgetOptions);",
        parameters=[Parameter(name="options", type="IWidgetOptions", is_optional=True)],
    )
    size_getter = Property(
        name="size",
        documentation=_doc("Size in pixels."),
        type="number",
        declaration_kind=DeclarationKind.GET_ACCESSOR,
    )
    size_setter = Property(
        name="size",
        type="number",
        declaration_kind=DeclarationKind.SET_ACCESSOR,
    )
    instance_count = Property(
        name="instanceCount",
        type="number",
        is_static=True,
        is_read_only=True,
    )
    index_signature = Member(name="__index", declaration_kind="IndexSignature")

    return StructuredType(
        name="Widget",
        documentation=_doc("A renderable widget.", release_tag=ReleaseTag.PUBLIC),
        extends="BaseWidget",
        implements="IRenderable",
        type_parameters=["TState"],
        members=[render, debug, constructor, size_getter, size_setter, instance_count, index_signature],
    )


def build_example_package(include_placeholder: bool = True) -> Package:
    """
    Build the example "widgets" package.

    Args:
        include_placeholder: Keep Widget's index-signature member, which is
            emitted as a placeholder node with a warning
    """
    widget = build_widget_class()
    if not include_placeholder:
        widget.members = [m for m in widget.members if not isinstance(m, Member)]

    options = StructuredType(
        name="IWidgetOptions",
        documentation=_doc("Options for a widget."),
        is_interface=True,
        members=[
            Property(name="label", type="string", is_optional=True),
            Method(
                name="onClick",
                signature="onClick?(event: Event): void;",
                parameters=[Parameter(name="event", type="Event")],
                return_type="void",
                is_optional=True,
            ),
        ],
    )

    color = EnumType(
        name="Color",
        documentation=_doc("Widget colors."),
        values=[
            EnumValue(name="Red", initializer="5"),
            EnumValue(name="Green"),
            EnumValue(name="Blue", initializer="'blue'"),
        ],
    )

    layout = Namespace(
        name="layout",
        documentation=_doc("Layout helpers.", release_tag=ReleaseTag.BETA),
        members=[
            Function(
                name="measure",
                documentation=_doc(returns_message=text_block("Width and height.")),
                parameters=[
                    Parameter(name="widget", type="Widget"),
                    Parameter(name="extra", type="number[]", is_spread=True),
                ],
                return_type="[number, number]",
            ),
            ModuleVariable(name="DEFAULT_GAP", type="number", value="8"),
        ],
    )

    create_widget = Function(
        name="createWidget",
        documentation=_doc(
            "Creates a widget.",
            deprecated_message=text_block("Use new Widget() instead."),
        ),
        parameters=[Parameter(name="options", type="IWidgetOptions", is_optional=True)],
        return_type="Widget",
    )

    experimental = StructuredType(
        name="ExperimentalWidget",
        documentation=_doc("Not ready yet.", release_tag=ReleaseTag.ALPHA),
        members=[
            Method(
                name="render",
                documentation=_doc(release_tag=ReleaseTag.PUBLIC),
                signature="render(): string;",
                return_type="string",
            ),
        ],
    )

    unsupported = Function(name="$helper", return_type="void")

    return Package(
        name="widgets",
        documentation=_doc("Widgets for the web."),
        members=[widget, options, color, layout, create_widget, experimental, unsupported],
    )
