import pytest

from okapi3.operations import (
    ArgumentKinds,
    OpenApiAttribute,
    build_operation,
    classify_arguments,
    openapi_path,
    operation_id,
    to_pascal_case,
)
from okapi3.openapi3 import Operation
from okapi3.routes import HttpMethod, Route, RouteError


def test_attribute_defaults():
    attr = OpenApiAttribute.from_args()
    assert attr.skip is False
    assert attr.tags == []


def test_attribute_skip_flag():
    attr = OpenApiAttribute.from_args(["skip"])
    assert attr.skip is True


def test_attribute_single_tag():
    attr = OpenApiAttribute.from_args(kwargs={"tag": "Users"})
    assert attr.tags == ["Users"]
    assert attr.skip is False


def test_attribute_multiple_tags():
    attr = OpenApiAttribute.from_args(kwargs={"tag": ["Posts", "Message"]})
    assert attr.tags == ["Posts", "Message"]


def test_attribute_unknown_field():
    with pytest.raises(ValueError, match="Unknown field"):
        OpenApiAttribute.from_args(kwargs={"title": "x"})


def test_attribute_unknown_flag():
    with pytest.raises(ValueError, match="Unknown field"):
        OpenApiAttribute.from_args(["hidden"])


def test_attribute_bad_skip_type():
    with pytest.raises(ValueError):
        OpenApiAttribute.from_args(kwargs={"skip": "yes"})


def test_classify_path_params():
    route = Route.parse("GET", "/user/<id>")
    kinds = classify_arguments(route, ["id"])
    assert kinds.path_params == ["id"]
    assert kinds.request_guards == []
    assert kinds.data_param is None


def test_classify_query_params():
    route = Route.parse("GET", "/user_example?<user_id>&<name>&<email>")
    kinds = classify_arguments(route, ["user_id", "name", "email"])
    assert kinds.query_params == ["user_id", "name", "email"]
    assert kinds.request_guards == []


def test_classify_multi_params():
    route = Route.parse("GET", "/paths/<path..>")
    kinds = classify_arguments(route, ["path"])
    assert kinds.path_multi_param == "path"
    query_route = Route.parse("GET", "/post_by_query?<post..>")
    assert classify_arguments(query_route, ["post"]).query_multi_params == ["post"]


def test_classify_data_param():
    route = Route.parse("POST", "/user", data="<user>")
    kinds = classify_arguments(route, ["user"])
    assert kinds.data_param == "user"
    assert kinds.request_guards == []


def test_request_guards_are_leftovers_sorted():
    route = Route.parse("GET", "/user/<id>")
    kinds = classify_arguments(route, ["token", "id", "auth"])
    assert kinds.request_guards == sorted(["token", "auth"])
    assert kinds == ArgumentKinds(path_params=["id"], request_guards=["auth", "token"])


def test_classify_missing_argument():
    route = Route.parse("GET", "/user/<id>")
    with pytest.raises(RouteError, match="Could not find argument id matching path param"):
        classify_arguments(route, ["name"])


def test_classify_missing_data_argument():
    route = Route.parse("POST", "/", data="<message>")
    with pytest.raises(RouteError, match="data param"):
        classify_arguments(route, [])


def test_openapi_path():
    assert openapi_path(Route.parse("GET", "/hello/<number>")) == "/hello/{number}"
    assert openapi_path(Route.parse("GET", "/paths/<path..>")) == "/paths/{path}"


def test_openapi_path_ignores_query():
    route = Route.parse("GET", "/page?<name>")
    assert openapi_path(route) == "/page"


def test_to_pascal_case():
    assert to_pascal_case(HttpMethod.GET) == "Get"
    assert to_pascal_case("DELETE") == "Delete"


def test_operation_id():
    assert operation_id("api_key::api_key") == "api_key_api_key"
    assert operation_id(["no_auth", "no_special_auth"]) == "no_auth_no_special_auth"
    assert operation_id("get_user") == "get_user"


def test_build_operation():
    route = Route.parse("GET", "/user/<id>")
    path, method, operation = build_operation(
        route,
        "get_user",
        ["# Get user", "", "Returns a single user by ID."],
        ["Users"],
    )
    assert path == "/user/{id}"
    assert method is HttpMethod.GET
    assert operation == Operation(
        operation_id="get_user",
        summary="Get user",
        description="Returns a single user by ID.",
        tags=["Users"],
    )


def test_build_operation_without_docs():
    route = Route.parse("POST", "/user", data="<user>")
    _, method, operation = build_operation(route, "create_user")
    assert method is HttpMethod.POST
    assert operation.to_dict() == {"operationId": "create_user", "responses": {}}


def test_build_operation_round_trips():
    route = Route.parse("GET", "/post/<id>")
    _, _, operation = build_operation(route, "get_post", "# Get a post by id", ["Posts"])
    assert Operation.from_dict(operation.to_dict()) == operation
    assert operation.description is None
    assert operation.summary == "Get a post by id"