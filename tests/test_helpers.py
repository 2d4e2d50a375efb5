from resume_ai.utils.helpers import is_valid_url, sanitize_for_log, split_list_items, unique_preserving_order


def test_sanitize_masks_contacts_and_numbers():
    text = "Jane, jane.doe@example.com, +7 (912) 345-67-89, SSN 123-45-6789, card 4111111111111111"
    clean = sanitize_for_log(text)
    assert "jane.doe@example.com" not in clean
    assert "345-67-89" not in clean
    assert "123-45-6789" not in clean
    assert "4111111111111111" not in clean
    assert clean.startswith("Jane, [EMAIL]")


def test_sanitize_truncates():
    clean = sanitize_for_log("word " * 100, max_length=20)
    assert clean.endswith("...")
    assert len(clean) == 23


def test_unique_preserving_order():
    assert unique_preserving_order(["Go", "go", "", "  ", "Python", "Go "]) == ["Go", "Python"]


def test_split_list_items_strips_bullets_and_dots():
    assert split_list_items("- Python; • Go | SQL.") == ["Python", "Go", "SQL"]
    assert split_list_items("") == []


def test_is_valid_url():
    assert is_valid_url("https://github.com/janedoe")
    assert is_valid_url("http://example.com/path?q=1")
    assert not is_valid_url("github.com/janedoe")
    assert not is_valid_url("not a url")
    assert not is_valid_url("")
