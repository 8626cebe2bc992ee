# tinyhttpd

Helpers for parsing HTTP requests, small socket utilities, and a minimal
command-line HTTP client.

## Installation

```
pip install .
```

## Fetching a page

```
tinyhttpd-client <host> <port> <filename>
```

The client opens one TCP connection, sends a `GET` request for `<filename>`
(naming this machine as the host), and prints each response header line
prefixed with `Header: `, followed by the body:

```
tinyhttpd-client localhost 8080 /index.html
```

With the wrong number of arguments it prints a usage line and exits with
status 1; it also exits with status 1 if the host cannot be resolved or the
connection fails.

From Python, `tinyhttpd.client` offers `send_request(wfile, filename, hostname=None)`,
`print_response(rfile, out=None)` and `main(argv=None)`.

## Parsing helpers

`tinyhttpd.parsing` works on raw request data:

- `parse_uri(uri)` maps a URI to a `UriInfo(is_static, filename, cgiargs)`;
  URIs containing `cgi` are dynamic and have their query split off, and a
  path ending in `/` maps to `index.html` inside it.
- `get_filetype(filename)` guesses a MIME type (`text/plain` by default).
- `url_decode(src)` decodes `%XX` escapes and `+` signs.
- `parse_post_data(data)` splits a url-encoded body into a list of
  `PostParam(key, value)`, decoding the values.
- `get_content_length(headers)` and `extract_content_type(headers)` read
  those header values from raw header text.
- `get_boundary(content_type)` returns the multipart delimiter with its
  leading `--`, or `None`; `normalize_content_type(content_type)` trims it
  and drops parameters after `;`.
- `extension_for(content_type)` gives the storage extension for an upload
  (`jpg`, `png`, `gif`, otherwise `bin`).
- `iter_file_parts(body, boundary)` yields each part of a
  `multipart/form-data` body as a `FilePart(name, filename, content_type, data)`.

```python
from tinyhttpd.parsing import get_boundary, iter_file_parts, parse_post_data, url_decode

url_decode("a%20b+c")            # "a b c"
parse_post_data("name=Ann&x=1")  # [PostParam(key='name', value='Ann'), PostParam(key='x', value='1')]
get_boundary("multipart/form-data; boundary=XYZ")  # "--XYZ"
```

## Socket helpers

`tinyhttpd.io_helper` provides `read_line(stream, maxlen)`, which reads one
line of at most `maxlen - 1` bytes from a binary stream,
`open_client_socket(hostname, port)`, and `open_listen_socket(port)`, which
returns a socket listening on every IPv4 address with address reuse enabled.

## What this package does not do

It contains no HTTP server: nothing here accepts connections, serves
static files, shows an upload form, stores uploaded files or writes error
pages. The parsing and socket helpers are the building blocks only, and
there is no server command.

## Running the tests

```
pip install .[test]
pytest
```