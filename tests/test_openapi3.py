import json

import pytest

from okapi3.openapi3 import (
    ApiKeyScheme,
    AuthorizationCodeFlow,
    Callback,
    ClientCredentialsFlow,
    Components,
    Contact,
    ContentValue,
    Encoding,
    Example,
    ExternalDocs,
    Header,
    HttpScheme,
    ImplicitFlow,
    Info,
    License,
    Link,
    MediaType,
    OAuth2Scheme,
    OpenApi,
    OpenIdConnectScheme,
    Operation,
    Parameter,
    ParameterStyle,
    PasswordFlow,
    PathItem,
    Ref,
    RequestBody,
    Response,
    Responses,
    SchemaValue,
    SecurityScheme,
    Server,
    ServerVariable,
    Tag,
)


def _custom_spec():
    return OpenApi(
        openapi=OpenApi.default_version(),
        info=Info(
            title="The best API ever",
            description="This is the best API every, please use me!",
            terms_of_service="https://example.com/terms",
            contact=Contact(name="okapi example", url="https://example.com/"),
            license=License(name="MIT", url="https://example.com/license"),
            version="0.1.0",
        ),
        servers=[
            Server(url="http://127.0.0.1:8000/", description="Localhost"),
            Server(
                url="https://example.com/",
                description="Possible Remote",
                variables={"port": ServerVariable(default="443", enumeration=["443", "8443"])},
            ),
        ],
        paths={
            "/home": PathItem(
                get=Operation(
                    tags=["HomePage"],
                    summary="This is my homepage",
                    responses=Responses(
                        responses={
                            "200": Response(
                                description="Return the page, no error.",
                                content={"text/html": MediaType(schema={"type": "string"})},
                            )
                        }
                    ),
                )
            )
        },
        tags=[Tag(name="HomePage", external_docs=ExternalDocs(url="https://example.com/docs"))],
        security=[{"ApiKeyAuth": []}],
    )


def test_default_version():
    assert OpenApi.default_version() == "3.0.0"
    assert OpenApi.new().openapi == "3.0.0"
    assert OpenApi().openapi == ""


def test_minimal_document_dict():
    assert OpenApi.new().to_dict() == {
        "openapi": "3.0.0",
        "info": {"title": "", "version": ""},
        "paths": {},
    }


def test_full_document_round_trip():
    spec = _custom_spec()
    assert OpenApi.from_dict(spec.to_dict()) == spec


def test_json_round_trip():
    spec = _custom_spec()
    text = spec.to_json(indent=2)
    assert OpenApi.from_json(text) == spec
    assert json.loads(text) == spec.to_dict()


def test_info_keys_are_camel_case():
    info = Info(title="t", version="1", terms_of_service="https://example.com/tos")
    data = info.to_dict()
    assert data["termsOfService"] == "https://example.com/tos"
    assert list(data) == ["title", "termsOfService", "version"]


def test_missing_required_fields_raise():
    with pytest.raises(ValueError):
        OpenApi.from_dict({"openapi": "3.0.0", "paths": {}})
    with pytest.raises(ValueError):
        Info.from_dict({"title": "only title"})
    with pytest.raises(ValueError):
        Operation.from_dict({})


def test_non_mapping_raises():
    with pytest.raises(ValueError):
        OpenApi.from_dict([1, 2, 3])


def test_extensions_are_kept():
    data = {"title": "t", "version": "1", "x-logo": {"url": "https://example.com/logo.png"}}
    info = Info.from_dict(data)
    assert info.extensions == {"x-logo": {"url": "https://example.com/logo.png"}}
    assert info.to_dict() == data


def test_ref_or_object_decoding():
    comps = Components.from_dict(
        {"responses": {"a": {"$ref": "#/components/responses/b"}, "b": {"description": "ok"}}}
    )
    assert comps.responses["a"] == Ref("#/components/responses/b")
    assert comps.responses["b"] == Response(description="ok")
    assert Components.from_dict(comps.to_dict()) == comps


def test_parameter_schema_serialization():
    param = Parameter(
        name="id", location="path", value=SchemaValue(schema={"type": "integer"}), required=True
    )
    assert param.to_dict() == {
        "name": "id",
        "in": "path",
        "required": True,
        "schema": {"type": "integer"},
    }
    assert Parameter.from_dict(param.to_dict()) == param


def test_parameter_with_style_and_examples_round_trip():
    param = Parameter(
        name="filter",
        location="query",
        value=SchemaValue(
            schema={"type": "object"},
            style=ParameterStyle.DEEP_OBJECT,
            explode=True,
            allow_reserved=True,
            examples={"one": Example(value={"a": 1})},
        ),
        description="Filter",
        deprecated=True,
        allow_empty_value=True,
        extensions={"x-internal": True},
    )
    data = param.to_dict()
    assert data["style"] == "deepObject"
    decoded = Parameter.from_dict(data)
    assert decoded == param
    assert decoded.extensions == {"x-internal": True}


def test_parameter_content_variant_round_trip():
    param = Parameter(
        name="q",
        location="query",
        value=ContentValue(content={"application/json": MediaType(schema={"type": "string"})}),
    )
    decoded = Parameter.from_dict(param.to_dict())
    assert isinstance(decoded.value, ContentValue)
    assert decoded == param


def test_parameter_without_schema_or_content_raises():
    with pytest.raises(ValueError):
        Parameter.from_dict({"name": "id", "in": "path"})


def test_parameter_style_unknown_raises():
    assert ParameterStyle("pipeDelimited") is ParameterStyle.PIPE_DELIMITED
    with pytest.raises(ValueError):
        SchemaValue.from_dict({"schema": {}, "style": "sideways"})


def test_header_round_trip():
    header = Header(value=SchemaValue(schema={"type": "string"}), description="rate", required=True)
    assert Header.from_dict(header.to_dict()) == header


def test_responses_split_extensions():
    responses = Responses.from_dict(
        {"default": {"description": "err"}, "200": {"description": "ok"}, "x-note": 1}
    )
    assert responses.default == Response(description="err")
    assert list(responses.responses) == ["200"]
    assert responses.extensions == {"x-note": 1}
    assert Responses.from_dict(responses.to_dict()) == responses


def test_callback_round_trip():
    cb = Callback(
        callbacks={"{$request.body#/url}": PathItem(post=Operation())},
        extensions={"x-kind": "hook"},
    )
    decoded = Callback.from_dict(cb.to_dict())
    assert decoded == cb
    op = Operation(callbacks={"hook": cb})
    assert Operation.from_dict(op.to_dict()) == op


def test_api_key_scheme_dict():
    scheme = SecurityScheme(
        description="Requires an API key to access, key is: `placeholder`.",
        data=ApiKeyScheme(name="x-api-key", location="header"),
    )
    assert scheme.to_dict() == {
        "description": "Requires an API key to access, key is: `placeholder`.",
        "type": "apiKey",
        "name": "x-api-key",
        "in": "header",
    }
    assert SecurityScheme.from_dict(scheme.to_dict()) == scheme


@pytest.mark.parametrize(
    "data",
    [
        HttpScheme(scheme="bearer", bearer_format="bearer"),
        OpenIdConnectScheme(open_id_connect_url="https://example.com/.well-known/openid-configuration"),
        OAuth2Scheme(flows=ImplicitFlow(authorization_url="https://example.com/auth", scopes={"read": "Read"})),
        OAuth2Scheme(flows=PasswordFlow(token_url="https://example.com/token")),
        OAuth2Scheme(flows=ClientCredentialsFlow(token_url="https://example.com/token", refresh_url="https://example.com/r")),
        OAuth2Scheme(
            flows=AuthorizationCodeFlow(
                authorization_url="https://example.com/auth",
                token_url="https://example.com/token",
                scopes={"user:read": "Ability to read user data"},
            )
        ),
    ],
)
def test_security_scheme_round_trip(data):
    scheme = SecurityScheme(data=data, extensions={"x-a": 1})
    decoded = SecurityScheme.from_dict(scheme.to_dict())
    assert decoded == scheme


def test_oauth2_flow_key():
    scheme = OAuth2Scheme(
        flows=AuthorizationCodeFlow(
            authorization_url="https://example.com/auth", token_url="https://example.com/token"
        )
    )
    data = scheme.to_dict()
    assert data["type"] == "oauth2"
    assert list(data["flows"]) == ["authorizationCode"]


def test_unknown_security_type_raises():
    with pytest.raises(ValueError):
        SecurityScheme.from_dict({"type": "magic"})


def test_oauth2_flows_need_exactly_one():
    first_flows = OAuth2Scheme(flows=PasswordFlow(token_url="https://example.com/t")).to_dict()["flows"]
    second_flows = OAuth2Scheme(
        flows=ImplicitFlow(authorization_url="https://example.com/a")
    ).to_dict()["flows"]
    assert len(first_flows) == 1
    assert len(second_flows) == 1
    with pytest.raises(ValueError):
        OAuth2Scheme.from_dict({"type": "oauth2", "flows": {**first_flows, **second_flows}})


def test_example_value_and_external_value():
    inline = Example(value=[1, 2], summary="list")
    external = Example(external_value="https://example.com/example.json")
    assert Example.from_dict(inline.to_dict()) == inline
    assert Example.from_dict(external.to_dict()) == external
    assert "value" not in external.to_dict()
    with pytest.raises(ValueError):
        Example.from_dict({"summary": "nothing"})


def test_path_item_servers_empty_list_kept():
    assert "servers" not in PathItem().to_dict()
    item = PathItem(servers=[])
    assert item.to_dict()["servers"] == []
    assert PathItem.from_dict(item.to_dict()) == item


def test_path_item_ref_key():
    item = PathItem(reference="#/paths/other", summary="s")
    data = item.to_dict()
    assert data["$ref"] == "#/paths/other"
    assert PathItem.from_dict(data) == item


def test_request_body_link_encoding_round_trip():
    body = RequestBody(
        content={
            "multipart/form-data": MediaType(
                schema={"type": "object"},
                encoding={"file": Encoding(content_type="image/png", allow_reserved=True)},
            )
        },
        required=True,
    )
    assert RequestBody.from_dict(body.to_dict()) == body
    link = Link(operation_id="getUser", parameters={"id": "$response.body#/id"}, server=Server(url="https://example.com/"))
    assert Link.from_dict(link.to_dict()) == link
    with pytest.raises(ValueError):
        RequestBody.from_dict({"description": "no content"})


def test_false_flags_and_empty_collections_skipped():
    op = Operation(deprecated=False)
    assert op.to_dict() == {"responses": {}}


def test_to_dict_returns_independent_copy():
    spec = _custom_spec()
    data = spec.to_dict()
    data["paths"]["/home"]["get"]["responses"]["200"]["content"]["text/html"]["schema"]["type"] = "int"
    data["security"][0]["ApiKeyAuth"].append("x")
    assert spec.paths["/home"].get.responses.responses["200"].content["text/html"].schema == {"type": "string"}
    assert spec.security == [{"ApiKeyAuth": []}]