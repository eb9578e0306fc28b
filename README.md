# okapi3

A small library for building, reading, writing and merging OpenAPI 3 documents.
It can also turn route declarations and their documentation into OpenAPI
operations.

It has no dependencies outside the standard library.

## Modules

- **`okapi3.openapi3`** holds dataclasses for the OpenAPI 3 object model:
  `OpenApi`, `Info`, `Contact`, `License`, `Server`, `ServerVariable`,
  `PathItem`, `Operation`, `Parameter`, `Header`, `RequestBody`, `Response`,
  `Responses`, `MediaType`, `Encoding`, `Example`, `Link`, `Callback`, `Tag`,
  `ExternalDocs`, `Components`, `SecurityScheme` and `Ref`.
  - `SecurityScheme` holds one of `ApiKeyScheme`, `HttpScheme`,
    `OAuth2Scheme` or `OpenIdConnectScheme`.
  - An `OAuth2Scheme` holds one flow: `ImplicitFlow`, `PasswordFlow`,
    `ClientCredentialsFlow` or `AuthorizationCodeFlow`.
  - A `Parameter` or `Header` is described by either a `SchemaValue` or a
    `ContentValue`.
  - Every class has `to_dict()` and a `from_dict()` class method.
    `from_dict()` raises `ValueError` when a required field is missing.
  - Keys that a class does not know are kept in its `extensions`.
  - `OpenApi` also has `to_json(indent)`, `from_json(text)`, `new()` and
    `default_version()`. `default_version()` returns `"3.0.0"`.
- **`okapi3.merge`** merges documents: `merge_spec_list`, `merge_specs` and
  the helpers they use (`merge_paths`, `merge_components`, `merge_tags`,
  `merge_responses` and others).
- **`okapi3.docs`**: `get_title_and_desc_from_doc` splits documentation lines
  into a summary and a description.
- **`okapi3.routes`** provides `Route`, `HttpMethod` and `RouteError`. It also
  has two helpers, `trim_angle_brackets` and `add_operation_fn_name`.
- **`okapi3.operations`** provides `OpenApiAttribute`, `classify_arguments`,
  `ArgumentKinds`, `openapi_path`, `to_pascal_case`, `build_operation` and
  `operation_id`.

## Building and serialising a document

```python
from okapi3.openapi3 import OpenApi, Info

spec = OpenApi.new()
spec.info = Info(title="My API", version="1.0.0")
text = spec.to_json(indent=2)
assert OpenApi.from_json(text) == spec
```

## Merging specs

```python
from pathlib import Path

from okapi3.merge import merge_spec_list
from okapi3.openapi3 import OpenApi

users = OpenApi.from_json(Path("users.json").read_text())
posts = OpenApi.from_json(Path("posts.json").read_text())

combined = merge_spec_list([("/users", users), ("/posts", posts)])
```

`merge_spec_list` starts from `OpenApi.new()` and merges each
`(path_prefix, spec)` pair into it in order. The rules are:

- The `openapi` versions must be equal, otherwise `MergeError` is raised.
- Each path is mounted under its prefix. A path without a leading `/` gets one
  added, and an error is logged.
- When a path already exists, the two path items are merged. Methods,
  summaries and other fields that are already set are kept; missing ones are
  taken from the second spec. Parameters are appended.
- For component and extension keys that already exist, the first value is
  kept. If the two values differ, a warning is logged.
- Tags with the same name are merged into one tag, in the order the tags were
  first seen.
- Server and security lists are appended in order.
- Empty info fields, such as the title and version, are filled in from the
  later spec.

## Routes

```python
from okapi3.routes import Route

route = Route.from_attribute("get", ["/user/<id>/<rest..>?<name>&<filter..>"])
route.path_params()         # ['id']
route.path_multi_param()    # 'rest'
route.query_params()        # ['name']
route.query_multi_params()  # ['filter']

body = Route.parse("POST", "/user", data="<user>", format="json")
body.data_param   # 'user'
body.media_type   # 'application/json'
```

`RouteError` is raised in these cases:

- the method is unknown;
- the URI does not start with `/`;
- the media type cannot be read.

## Operations from routes

```python
from okapi3.operations import build_operation, classify_arguments
from okapi3.routes import Route

route = Route.parse("GET", "/user/<id>?<name>")
path, method, operation = build_operation(
    route,
    "get_user",
    ["# Get user", "", "Returns a single user by ID."],
    ["Users"],
)
# path == "/user/{id}", operation.summary == "Get user",
# operation.description == "Returns a single user by ID."

kinds = classify_arguments(route, ["id", "name", "db"])
# kinds.path_params == ["id"], kinds.query_params == ["name"],
# kinds.request_guards == ["db"]
```

`classify_arguments` raises `RouteError` when the route names an argument that
the function does not have.

## What it does not do

- It runs no web server.
- It does not serve the generated document.
- It ships no documentation viewer.
- It does not inspect function signatures or types. `build_operation` fills in
  only the operation id, summary, description and tags. Parameters, request
  bodies, responses and security requirements have to be added to the
  returned `Operation` by the caller.

## Running the tests

```
pip install -e .[test]
pytest
```