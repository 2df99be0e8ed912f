import json
from decimal import Decimal

import pytest

from ledgerapi.models import Account, money_to_json
from ledgerapi.responses import (
    bad_request,
    created,
    error_response,
    not_found,
    ok,
    success_response,
)


def _body(resp):
    return json.loads(resp.get_data(as_text=True))


def test_error_response_wire_format():
    resp = error_response(400, "boom")
    assert resp.status_code == 400
    assert resp.content_type == "application/json"
    assert resp.get_data() == b'{"success":false,"error":"boom"}\n'


def test_success_response_omits_empty_fields():
    resp = success_response(200, "", None)
    assert resp.status_code == 200
    assert _body(resp) == {"success": True}


def test_success_response_serialises_account():
    account = Account(account_id=3, balance="12.50")
    resp = success_response(200, "found", account)
    body = _body(resp)
    assert body["success"] is True
    assert body["message"] == "found"
    assert body["data"] == account.to_dict()


def test_decimal_data_is_rendered_as_money():
    amount = Decimal("10.500")
    body = _body(ok({"amount": amount}))
    assert body["data"]["amount"] == money_to_json(amount)


def test_html_characters_are_escaped_and_round_trip():
    resp = error_response(400, "<a&b>")
    raw = resp.get_data(as_text=True)
    assert "\\u003ca\\u0026b\\u003e" in raw
    assert _body(resp)["error"] == "<a&b>"


def test_non_ascii_round_trips():
    resp = bad_request("saldo insuficiente €")
    assert _body(resp)["error"] == "saldo insuficiente €"


@pytest.mark.parametrize(
    ("factory", "status"),
    [(bad_request, 400), (not_found, 404)],
)
def test_error_shortcuts(factory, status):
    resp = factory("nope")
    assert resp.status_code == status
    assert _body(resp) == {"success": False, "error": "nope"}


def test_created_has_message_without_data():
    resp = created("made")
    assert resp.status_code == 201
    assert _body(resp) == {"success": True, "message": "made"}


def test_ok_has_data_without_message():
    resp = ok({"k": [1, 2]})
    assert resp.status_code == 200
    assert _body(resp) == {"success": True, "data": {"k": [1, 2]}}


def test_empty_container_data_is_kept():
    assert _body(ok({}))["data"] == {}


def test_unserialisable_data_raises():
    with pytest.raises(TypeError):
        ok(object())