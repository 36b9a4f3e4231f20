# transportgen

`transportgen` reads Go service interfaces whose doc comments carry
generator tags, turns every method into a description of an HTTP endpoint
(method, URI path and placeholders, query, header and cookie parameters,
request body, response body, headers and status) and hands those
descriptions to renderer objects. From the same annotations it can
assemble an OpenAPI 3.0.0 document and write it as JSON or YAML.

## Installation

```
pip install transportgen
```

For running the test suite:

```
pip install "transportgen[test]"
pytest
```

## Modules

* `transportgen.api` – the data model. Parsed source is described by
  `GoFile`, `GoInterface`, `Function`, `Variable`, `Struct`, `StructField`
  and the type nodes `TName`, `TPointer`, `TArray`, `TImport`, `TMap`,
  `TEllipsis` and `TInterface`; `is_builtin` tells whether a type is made
  only of predeclared types. Generation state lives in `GenerationInfo`,
  `Interface`, `HTTPMethod`, `Placeholder`, `MetricsPlaceholder` and
  `SwaggerInfo`. Malformed tags raise `TagError` (a `ValueError`).
* `transportgen.request_tags`, `transportgen.response_tags`,
  `transportgen.swagger_tags` – chains of tag parsers. Each link is built
  as `Parser(prefix, suffix="", next_parser=None)`, recognises a tag that
  starts with `prefix` and ends with `suffix`, and passes any other tag to
  `next_parser`. A chain ends with `Term` (or `SwaggerTerm` for the
  swagger chain), which ignores what it is given.
  * request: `Method`, `APIPath`, `ContentType`, `Cookie`,
    `ErrorProcessor`, `FormUrlencodedTag`, `Header`, `JSONTag`,
    `MultipartFileTag`, `MultipartValueTag`, `PlainObjectTag`, `Query`,
    `URIPath`, `LogIgnore`;
  * response: `ResponseBody`, `ContentEncoding`, `ResponseContentType`,
    `File`, `ResponseHeader`, `ResponseJSONTag`, `Status`;
  * swagger: `Title`, `Description`, `Summary`, `Version`, `Servers`.

  A recognised tag with the wrong number of values raises `TagError`;
  `JSONTag` and `PlainObjectTag` also refuse to be combined.
* `transportgen.httpmethod.HTTPMethodProcessor(tag_mark, tags_parser)` –
  runs the tag chain over a method's doc comments, then decides which
  arguments (after the first) form the request body and which results
  (all but the last) form the response body, and records the type of each
  query, body and metrics-label placeholder. A `GET` method that would
  still have a request body, an `application/octet-stream` method without
  exactly one body argument or result, an unknown metrics label and a
  metrics label that is not a string or int (or a pointer to one) all
  raise `TagError`.
* `transportgen.services.ServicesProcessor(tag_mark, processors,
  http_method_processor, metrics_tag)` – finds interfaces whose comment
  starts with `tag_mark`, prepares an `HTTPMethod` for every method and
  runs each processor named by a word of the tag. A word holding
  `metrics_tag` may carry labels, as in `metrics(region,kind)`.
* `transportgen.generation` – `HTTPServerProcessor`,
  `HTTPClientProcessor`, `ErrorsProcessor`, `LoggingProcessor`,
  `InstrumentingProcessor` and `MockProcessor`. Each calls `generate` on
  the renderer objects it was given with a copy of the interface;
  failures are re-raised as `RuntimeError`.
* `transportgen.swagger.SwaggerProcessor` – adds one operation per method
  to `GenerationInfo.swagger`, a plain dict holding the OpenAPI document,
  with parameters, request body, response body, response headers and a
  status from `cast_status_const`. Named struct types are looked up on
  disk through `mod.pkg_mod_path`, `./vendor` and the local module, and
  read with the `file_parser` callable. `cast_builtin_type` gives the
  OpenAPI `(type, format)` pair of a builtin type.
* `transportgen.preprocessor.Preprocessor(services_processor,
  go_generated_prefix, swagger_render, file_parser)` – walks a directory
  tree in name order, skips `.go` files containing the generated-code
  marker, processes the rest and, if a document was collected, sets its
  `openapi` version to `3.0.0` and hands it to `swagger_render`.
* `transportgen.swagger_render.SwaggerRender(file_name)` – creates
  `GenerationInfo.swagger_abs_output_path` and writes the document there,
  appending `.json` when JSON output is requested and `.yaml` when YAML
  output is requested. With both, the file is `<name>.json.yaml` and holds
  YAML; with neither, an empty file `<name>` is written.
* `transportgen.mod` – `parse_go_mod(text, go_path)` reads the module path
  and requirements from a go.mod file, mapping each requirement to its
  module-cache directory; `GoMod.pkg_mod_path` resolves an import path to
  a directory, asking `go env GOMOD` for the module file unless one is
  given.
* `transportgen.imports.GoImports.go_imports(path)` runs `goimports -w`
  on a file and raises if the tool is missing or fails.

## Example

```python
from transportgen.api import HTTPMethod
from transportgen.request_tags import Method, Query, URIPath

chain = Method("http-method", next_parser=URIPath("http-uri-path",
                next_parser=Query("http-query")))

endpoint = HTTPMethod()
chain.parse(endpoint, "http-method", "GET")
chain.parse(endpoint, "http-uri-path", "/users/{id}")
chain.parse(endpoint, "http-query", "limit={limit}&offset={offset}")

endpoint.uri_path               # "/users/:id"
endpoint.client_uri_path        # "/users/%s"
endpoint.uri_path_placeholders  # ["id"]
sorted(endpoint.query_placeholders)  # ["limit", "offset"]
```

Status names map to codes; anything else passes through:

```python
from transportgen.swagger import cast_status_const

cast_status_const("http.StatusOK")        # "200"
cast_status_const("http.StatusNotFound")  # "404"
cast_status_const("201")                  # "201"
```

## What the package does not do

* It does not parse Go source. `Preprocessor` and `SwaggerProcessor` take
  a `file_parser` callable that turns a file path into a `GoFile`; you
  supply it.
* It does not contain code templates. The processors in
  `transportgen.generation` only call `generate(iface)` on renderer
  objects you pass in; writing server, client, error, logging, metrics or
  mock code is up to those objects.
* It has no command-line program; it is used as a library.