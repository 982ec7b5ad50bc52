from tasklane.services.mentions import parse_mentions


def test_mentions_in_order_without_duplicates():
    assert parse_mentions("hi @Bob, cc @alice @bob") == ["Bob", "alice"]

def test_mention_at_start_of_text():
    assert parse_mentions("@carol please review") == ["carol"]

def test_email_address_is_not_a_mention():
    assert parse_mentions("mail me at dave@example.com") == []

def test_mentions_after_punctuation():
    assert parse_mentions("(@erin) [@frank] {@gina}.@hank!@ivan") == ["erin", "frank", "gina", "hank", "ivan"]

def test_adjacent_mentions_without_separator_only_match_first():
    assert parse_mentions("@a@b") == ["a"]

def test_bare_at_sign_is_ignored():
    assert parse_mentions("meet @ noon") == []

def test_empty_input():
    assert parse_mentions("") == []
    assert parse_mentions(None) == []

def test_word_characters_include_digits_and_underscore():
    assert parse_mentions("ping @dev_ops2 and @QA_1") == ["dev_ops2", "QA_1"]
