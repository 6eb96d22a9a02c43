"""Composable HTML tags and pages rendered to strings."""

from __future__ import annotations

import enum
from typing import Optional, Union

DOC_TYPE = "<!DOCTYPE html>"

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
)


def escape(text: str) -> str:
    """Return ``text`` with HTML-significant characters replaced by entities."""
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


def _indent(tab: int) -> str:
    return "\n" + "\t" * tab


class Tag:
    """An HTML element with attributes, an optional value and child tags."""

    TAG = ""

    def __init__(self, value: str = "") -> None:
        self.value = value
        self.attributes: list[tuple[str, str]] = []
        self.tags: list[Tag] = []

    @property
    def name(self) -> str:
        return self.TAG

    def attribute(self, key: str, value: str = "") -> "Tag":
        """Append an attribute; an empty value renders the key alone."""
        self.attributes.append((key, value))
        return self

    def add(self, tag: "Tag") -> "Tag":
        self.tags.append(tag)
        return self

    def br(self) -> "Tag":
        return self.add(Named("br"))

    def esc(self, text: str) -> "Tag":
        return self.add(EscapedText(text))

    def text(self, text: str) -> "Tag":
        return self.add(Text(text))

    def __len__(self) -> int:
        return len(self.tags)

    def _children(self) -> list["Tag"]:
        return list(self.tags)

    def render(self, tab: Optional[int] = None, pretty: bool = False) -> str:
        """Render this tag and its children as HTML."""
        if tab is None:
            tab = 1 if pretty else 0
        children = self._children()
        parts = []
        if pretty:
            parts.append(_indent(tab))
        parts.append("<" + self.name)
        for key, value in self.attributes:
            parts.append(" " + key)
            if value:
                parts.append(f'="{value}"')
        has_content = bool(children) or bool(self.value)
        parts.append(">" if has_content else "/>")
        tab += 1
        if self.value:
            parts.append(self.value)
        for child in children:
            parts.append(child.render(tab if pretty else None, pretty))
        if pretty and children:
            parts.append(_indent(tab - 1))
        if has_content:
            parts.append(f"</{self.name}>")
        return "".join(parts)


class Named(Tag):
    """A tag whose element name is given at construction."""

    def __init__(self, name: str, value: str = "") -> None:
        super().__init__(value)
        self._name = name

    @property
    def name(self) -> str:
        return self._name


class Label(Tag):
    TAG = "label"


class InputTag(Tag):
    TAG = "input"


class TextBox(InputTag):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.attribute("name", name)
        self.attribute("type", "text")


class TextArea(Tag):
    pass


class Select(Tag):
    TAG = "select"

    def __init__(self, name: str) -> None:
        super().__init__()
        self.attribute("id", name)
        self.attribute("name", name)

    def option(self, key: str, value: str) -> "Select":
        opt = Named("option", value)
        opt.attribute("value", key)
        self.add(opt)
        return self


class Radio(Tag):
    pass


class CheckBox(InputTag):
    def __init__(self, name: str, value: str, checked: bool = False) -> None:
        super().__init__()
        if checked:
            self.attribute("checked")
        self.attribute("name", name).attribute("value", value).attribute("type", "checkbox")


class CheckList(Tag):
    pass


class Button(InputTag):
    def __init__(self, name: str, value: str = "Submit", hidden: bool = False) -> None:
        super().__init__()
        self.attribute("name", name).attribute("value", value).attribute("type", "submit")
        if hidden:
            self.attribute(
                "style", "position: absolute; left: -9999px; width: 1px; height: 1px;"
            ).attribute("tabindex", "-1")


class FormMethod(enum.Enum):
    POST = 0
    GET = 1


class Form(Tag):
    TAG = "form"

    def __init__(self, name: str, method: FormMethod = FormMethod.POST) -> None:
        super().__init__()
        self.method = method
        self.attribute("method", "post" if method is FormMethod.POST else "get")
        self.attribute("name", name)

    def button(self, name: str, value: str = "Submit", hidden: bool = False) -> "Form":
        self.add(Button(name, value, hidden))
        return self

    def hidden(self, name: str, value: str) -> "Form":
        field = Named("input")
        field.attribute("type", "hidden")
        field.attribute("name", name)
        field.attribute("value", value)
        self.add(field)
        return self


class TableRow(Tag):
    TAG = "tr"


class TableData(Tag):
    TAG = "td"


class TableColumn(Tag):
    """A table header cell holding the data cells of its column."""

    TAG = "th"

    def __init__(self, value: str = "") -> None:
        super().__init__(value)
        self.cells: list[Tag] = []

    def data(self, item: Union[str, Tag]) -> "TableColumn":
        self.cells.append(TableData(item) if isinstance(item, str) else item)
        return self


class Table(Tag):
    TAG = "table"

    def __init__(self, show_header: bool = True) -> None:
        super().__init__()
        self.show_header = show_header
        self.columns: list[TableColumn] = []

    def column(self, value: str = "") -> TableColumn:
        col = TableColumn(value)
        self.columns.append(col)
        return col

    def _children(self) -> list[Tag]:
        rows: list[Tag] = []
        if self.show_header:
            header = TableRow()
            for col in self.columns:
                header.add(col)
            rows.append(header)
        if self.columns:
            for index in range(len(self.columns[0].cells)):
                row = TableRow()
                for col in self.columns:
                    if index < len(col.cells):
                        row.add(col.cells[index])
                rows.append(row)
        return list(self.tags) + rows

    def render(self, tab: Optional[int] = None, pretty: bool = False) -> str:
        return super().render(tab, pretty)


class Text(Tag):
    """Raw text content."""

    def render(self, tab: Optional[int] = None, pretty: bool = False) -> str:
        if tab is None:
            tab = 1 if pretty else 0
        return (_indent(tab) if pretty else "") + self.value


class EscapedText(Text):
    """Text content that is HTML-escaped on construction."""

    def __init__(self, value: str) -> None:
        super().__init__(escape(value))


class Body(Tag):
    TAG = "body"


class Head(Tag):
    TAG = "head"


class Page:
    """An HTML document with a head and a body."""

    def __init__(self) -> None:
        self._head = Head()
        self._body = Body()

    def body(self, tag: Optional[Tag] = None) -> Union[Tag, "Page"]:
        """Return the body, replace it with a Body, or append a tag to it."""
        if tag is None:
            return self._body
        if isinstance(tag, Body):
            self._body = tag
        else:
            self._body.add(tag)
        return self

    def head(self, tag: Optional[Tag] = None) -> Union[Tag, "Page"]:
        """Return the head, replace it with a Head, or append a tag to it."""
        if tag is None:
            return self._head
        if isinstance(tag, Head):
            self._head = tag
        else:
            self._head.add(tag)
        return self

    def render(self, pretty: bool = False) -> str:
        return (
            DOC_TYPE
            + "\n<html>"
            + self._head.render(pretty=pretty)
            + self._body.render(pretty=pretty)
            + "\n</html>"
        )