"""Search schemas — camelCase wire format and required fields."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from netscraper_api.core.domain_types import GroupId, GroupSummary, TermId, TermRecord
from netscraper_api.schemas.search import (
    CreateGroup,
    CreateTerm,
    GroupResponse,
    TermResponse,
)


def test_create_term_accepts_camel_case():
    body = CreateTerm.model_validate(
        {"term": "football", "searchGroupId": 3, "outputQuery": "q"},
    )
    assert body.search_group_id == 3
    assert body.output_query == "q"
    assert body.start_date is None


def test_create_term_accepts_snake_case():
    body = CreateTerm.model_validate({"term": "football", "search_group_id": 3})
    assert body.search_group_id == 3


def test_create_term_requires_group_id():
    with pytest.raises(ValidationError):
        CreateTerm.model_validate({"term": "football"})


@pytest.mark.parametrize("group_id", [0, 2**31])
def test_create_term_group_id_must_fit_integer_column(group_id):
    with pytest.raises(ValidationError):
        CreateTerm.model_validate({"term": "football", "searchGroupId": group_id})


def test_create_term_accepts_largest_group_id():
    body = CreateTerm.model_validate({"term": "football", "searchGroupId": 2**31 - 1})
    assert body.search_group_id == 2**31 - 1


def test_create_group_requires_name():
    with pytest.raises(ValidationError):
        CreateGroup.model_validate({})


def test_group_response_serializes_term_count_in_camel_case():
    resp = GroupResponse.from_summary(GroupSummary(GroupId(1), "Sports", 2))
    assert resp.model_dump(by_alias=True) == {"id": 1, "name": "Sports", "termCount": 2}


def test_term_response_serializes_camel_case_keys():
    record = TermRecord(
        id=TermId(5), term="football", search_group_id=GroupId(1),
        start_date=datetime(2025, 8, 22), output_query="select 1",
    )
    dumped = TermResponse.from_record(record).model_dump(by_alias=True, mode="json")
    assert dumped == {
        "id": 5,
        "term": "football",
        "searchGroupId": 1,
        "startDate": "2025-08-22T00:00:00",
        "endDate": None,
        "outputQuery": "select 1",
    }
