# ramnet

A small networking toolkit that uses only the Python standard library:

- `ramnet.html` – build HTML documents from tag objects and render them to text.
- `ramnet.tcp` – a blocking IPv4 TCP client socket, usable as a context manager.
- `ramnet.http` – HTTP/1.1 GET and POST requests, responses and cookies.
- `ramnet.session` – sessions that expire after inactivity, swept by a background thread.

## Building HTML

```python
from ramnet.html import Page, Form, FormMethod, Table, TextBox, Label, escape

page = Page()
page.head().text("<title>Demo</title>")

form = Form("login", FormMethod.POST)
form.add(Label("Name"))
form.add(TextBox("name"))
form.hidden("step", "1")
form.button("go")
page.body(form)

table = Table()
table.column("Fruit").data("apple").data("pear")
table.column("Colour").data("green").data("yellow")
page.body(table)

html = page.render()              # compact
pretty = page.render(pretty=True)  # one tag per line, tab-indented
```

- `Tag.attribute(key, value)` appends an attribute; an empty value renders the key alone.
- `Tag.add`, `Tag.br`, `Tag.text` and `Tag.esc` append children; `esc` HTML-escapes its
  text, `text` does not.
- `escape(text)` replaces `& < > " ' /` with entities.
- A tag with no value and no children renders self-closed (`<br/>`).
- `Page.body()` / `Page.head()` with no argument return the tag; given a `Body` / `Head`
  they replace it, given any other tag they append it.
- `Table(show_header=True)` renders a header row of its columns' `th` cells, then one
  `tr` per data row, taking the row count from the first column.

Other tags: `Named`, `Select` (with `option`), `CheckBox`, `Button`, `TableColumn`,
`TableData`, `TableRow`, `Text`, `EscapedText`, `InputTag`, `TextArea`, `Radio`,
`CheckList`.

## TCP client

```python
from ramnet.tcp import Socket, TcpError

with Socket() as sock:
    sock.connect("example.com", 80)
    sock.write(b"GET / HTTP/1.1\r\nHost: example.com\r\n\r\n")
    data = sock.read_all(4096)
```

`connect` tries each IPv4 address of the host in turn and raises `TcpError` if none
answers. `read(size)` waits up to `timeout` seconds (about 1 s by default) for the peer
and returns what is available, `b""` once the peer has closed; it raises `TcpError` if
nothing arrives in time. `read_all(size)` keeps reading while more data is waiting.

## HTTP messages

```python
from ramnet.http import GetRequest, PostRequest, Response

req = GetRequest("example.com", "search")
req.param("q", "ramnet")
print(req.render())

post = PostRequest("example.com", "submit", body="a=1")
post.header("Content-Type", "application/x-www-form-urlencoded")
post.cookie("session", "token")

raw = "HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n<p>hi</p>"
res = Response.from_string(raw)
assert res.status == 200 and res.body == "<p>hi</p>"
```

Rendered requests carry `Host`, your headers, then `Connection: close` and
`Accept: text/html` (unless you set them or set `Transfer-Encoding`), a
`Content-Length` for a non-empty body, and a `Cookie` line. `header(key)` and
`cookie(key)` without a value look the entry up.

`Request.send()` connects, writes the rendered request, parses the reply into a
`Response`, passes it to `handle_response` (which by default stores it on
`request.response`; override it in a subclass) and returns it. A failed connection or
read raises `HttpError`.

`Response.render()` produces the status line, headers and `Set-Cookie` lines followed
by the body. Cookies are `Cookie` dataclasses with `domain`, `path`, `http_only`,
`secure` and `expires`; `Cookie.invalidate()` makes the rendered cookie expire
immediately. `Response.from_string` parses status, reason, headers, `Set-Cookie` lines
and body, and raises `HttpError` for a non-numeric status.

## Sessions

```python
from ramnet.session import SessionServer

with SessionServer() as sessions:
    sessions.add("abc")
    if sessions.has("abc"):
        sessions.refresh("abc")
    session = sessions.get("abc")
```

A `Session` expires once it has not been refreshed for `ttl` seconds (600 by default).
`Session.invalidate()` pins a session so it is never refreshed and never expires.
`SessionServer` takes a session `factory` and a `check_interval` (10 s by default) for
its background sweep; `purge()` sweeps at once and returns the removed ids, and
`shutdown()` (or leaving the `with` block) stops the thread. `get` and `has` age a live
session by five seconds on each call.

## What is not included

The package has no HTTP or TCP server and no FastCGI support, and it provides no
command-line program: it builds and parses HTTP messages, sends requests as a client,
renders HTML and keeps sessions. Serving requests is left to whatever server you pair
it with.