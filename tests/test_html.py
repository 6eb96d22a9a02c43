import pytest

from ramnet.html import (
    Body,
    Button,
    CheckBox,
    EscapedText,
    Form,
    FormMethod,
    Head,
    Label,
    Named,
    Page,
    Select,
    Table,
    TableData,
    Text,
    TextBox,
    escape,
)


@pytest.mark.parametrize(
    "raw, entity",
    [("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"), ("'", "&#x27;"), ("/", "&#x2F;")],
)
def test_escape_single_characters(raw, entity):
    assert escape(raw) == entity


def test_escape_ampersand_not_double_escaped():
    result = escape("<")
    assert result.count("&") == 1
    assert escape("plain text") == "plain text"


def test_empty_tag_self_closes():
    assert Named("br").render() == "<br/>"


def test_tag_with_value():
    assert Named("p", "hi").render() == "<p>hi</p>"


def test_attribute_without_value_renders_key_only():
    tag = Named("input").attribute("checked").attribute("name", "n")
    assert tag.render() == '<input checked name="n"/>'


def test_br_and_len():
    tag = Named("div").br().br()
    assert len(tag) == 2
    assert tag.render() == "<div><br/><br/></div>"


def test_text_and_esc_children():
    tag = Named("div").text("<b>").esc("<b>")
    out = tag.render()
    assert out.startswith("<div><b>")
    assert escape("<b>") in out
    assert out.endswith("</div>")


def test_escaped_text_value():
    assert EscapedText("a/b").render() == escape("a/b")
    assert Text("a/b").render() == "a/b"


def test_pretty_nested_render():
    tag = Named("div").add(Named("p", "x"))
    assert tag.render(pretty=True) == "\n\t<div>\n\t\t<p>x</p>\n\t</div>"


def test_label_and_textbox():
    assert Label("L").render() == "<label>L</label>"
    assert TextBox("user").render() == '<input name="user" type="text"/>'


def test_checkbox_checked_first():
    out = CheckBox("c", "v", True).render()
    assert out.startswith("<input checked ")
    assert 'type="checkbox"' in out
    assert "checked" not in CheckBox("c", "v").render()


def test_button_hidden_adds_tabindex():
    out = Button("b", hidden=True).render()
    assert 'value="Submit"' in out
    assert 'tabindex="-1"' in out
    assert "tabindex" not in Button("b").render()


def test_form_methods():
    assert 'method="post"' in Form("f").render()
    get_form = Form("f", FormMethod.GET)
    assert 'method="get"' in get_form.render()
    assert get_form.method is FormMethod.GET


def test_form_button_and_hidden():
    form = Form("f").hidden("k", "v").button("go")
    assert len(form) == 2
    out = form.render()
    assert 'type="hidden" name="k" value="v"' in out
    assert 'type="submit"' in out


def test_select_option():
    sel = Select("s").option("1", "One")
    assert len(sel) == 1
    assert '<option value="1">One</option>' in sel.render()


def test_table_header_and_rows():
    table = Table()
    table.column("A").data("1")
    table.column("B").data(TableData("2"))
    out = table.render()
    assert out == "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
    assert table.render() == out


def test_table_without_header():
    table = Table(show_header=False)
    table.column("A").data("1")
    out = table.render()
    assert "<th>" not in out
    assert out.count("<tr>") == 1


def test_page_render_default():
    assert Page().render() == "<!DOCTYPE html>\n<html><head/><body/>\n</html>"


def test_page_body_append_and_replace():
    page = Page()
    page.body(Named("p", "x"))
    assert len(page.body()) == 1
    new_body = Body()
    page.body(new_body)
    assert page.body() is new_body
    page.head(Named("title", "T"))
    assert "<head><title>T</title></head>" in page.render()
    new_head = Head()
    page.head(new_head)
    assert page.head() is new_head
    assert "<head/>" in page.render()
    assert page.render().startswith("<!DOCTYPE html>\n<html>")