"""Customer parsing tests: incomplete records parse, they do not raise."""

import pytest
from pydantic import ValidationError

from targetwise.domain.customer import Customer


def test_camel_and_snake_case():
    a = Customer.model_validate({"id": "c1", "birthYear": 1990})
    b = Customer(id="c1", birth_year=1990)
    assert a == b


def test_numeric_id_becomes_string():
    assert Customer.model_validate({"id": 42}).id == "42"


def test_malformed_fields_become_none():
    c = Customer.model_validate({
        "id": "c1",
        "gender": "  ",
        "birthYear": "unknown",
        "sido": "",
        "lat": "not-a-number",
        "lng": float("nan"),
    })
    assert c.gender is None
    assert c.birth_year is None
    assert c.sido is None
    assert c.lat is None
    assert c.lng is None
    assert not c.has_coordinates


def test_numeric_strings_are_parsed():
    c = Customer.model_validate({"id": "c1", "birthYear": "1995", "lat": "37.5", "lng": "127.0"})
    assert c.birth_year == 1995
    assert c.lat == 37.5
    assert c.has_coordinates


def test_gender_upper_cased():
    assert Customer(id="c1", gender="f").gender == "F"


def test_booleans_are_not_numbers():
    assert Customer.model_validate({"id": "c1", "lat": True}).lat is None


def test_unknown_fields_ignored():
    c = Customer.model_validate({"id": "c1", "name": "홍길동", "phone": "010-0000-0000"})
    assert c.id == "c1"


def test_id_required():
    with pytest.raises(ValidationError):
        Customer.model_validate({"gender": "F"})
