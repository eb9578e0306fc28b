from okapi3.docs import get_title_and_desc_from_doc


def test_title_and_description():
    lines = [" # Get all users", "", " Returns all users in the system."]
    assert get_title_and_desc_from_doc(lines) == (
        "Get all users",
        "Returns all users in the system.",
    )


def test_no_doc():
    assert get_title_and_desc_from_doc([]) == (None, None)
    assert get_title_and_desc_from_doc(["", "   "]) == (None, None)


def test_without_title_lines_are_joined():
    assert get_title_and_desc_from_doc([" Some text", " continues here"]) == (
        None,
        "Some text continues here",
    )


def test_paragraphs_kept_apart():
    lines = ["# Title", "", "first", "line", "", "", "second"]
    title, desc = get_title_and_desc_from_doc(lines)
    assert title == "Title"
    assert desc == "first line\n\nsecond"


def test_title_only():
    assert get_title_and_desc_from_doc([" # Create user"]) == ("Create user", None)


def test_empty_title_is_none():
    assert get_title_and_desc_from_doc(["#", "body"]) == (None, "body")


def test_leading_blank_lines_skipped():
    assert get_title_and_desc_from_doc(["", "  ", "## Heading", "text"]) == ("Heading", "text")


def test_multiline_chunk_string():
    doc = "# Get user\n\nReturns a single user by ID."
    assert get_title_and_desc_from_doc(doc) == ("Get user", "Returns a single user by ID.")