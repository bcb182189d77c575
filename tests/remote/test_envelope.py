from career_passport.remote.envelope import login_payload, parse_envelope, save_payload


def test_success_envelope():
    res = parse_envelope('{"status": "success", "data": {"users": []}}')
    assert res.ok
    assert res.data == {"users": []}


def test_fail_envelope_keeps_message():
    res = parse_envelope('{"status": "fail", "message": "Wrong password"}')
    assert not res.ok
    assert (res.status, res.message) == ("fail", "Wrong password")


def test_html_error_page_is_script_error():
    res = parse_envelope("<!DOCTYPE html><html><body>TypeError</body></html>")
    assert res.status == "error"
    assert "script error" in res.message


def test_unreadable_bodies_are_errors():
    assert parse_envelope("not json").status == "error"
    assert parse_envelope("[1, 2]").status == "error"
    assert parse_envelope('{"status": "weird"}').status == "error"


def test_payload_shapes():
    assert login_payload("a@example.org", "pw") == {"action": "login", "userId": "a@example.org", "password": "pw"}
    assert save_payload("a@example.org", "pw", "delete_course", {"id": "c1"}) == {
        "action": "save",
        "userId": "a@example.org",
        "password": "pw",
        "data": {"id": "c1", "dataType": "delete_course"},
    }
