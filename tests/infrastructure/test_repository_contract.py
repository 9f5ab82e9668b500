"""Repository contract — both backends honour the same CRUD semantics.

Invariants:
    - create_group → list_groups shows the group with term_count 0
    - Duplicate names (trimmed, any case, non-ASCII included) raise ConflictError
      and add no row
    - delete_group removes exactly the group's terms; later lookups are NotFound
    - create_term with an unknown group raises ValidationError and adds no row
    - Terms list in ascending text order regardless of insertion order
"""

from datetime import datetime, timedelta, timezone

import pytest

from netscraper_api.core.domain_types import GroupId, TermId
from netscraper_api.core.errors import ConflictError, NotFoundError, ValidationError


async def test_created_group_is_listed_with_zero_terms(repo):
    created = await repo.create_group("Sports")

    groups = await repo.list_groups()

    assert [(g.id, g.name, g.term_count) for g in groups] == [(created.id, "Sports", 0)]
    assert created.term_count == 0


async def test_create_group_trims_name(repo):
    created = await repo.create_group("  News  ")
    assert created.name == "News"


@pytest.mark.parametrize("name", ["", "   "])
async def test_create_group_rejects_blank_name(repo, name):
    with pytest.raises(ValidationError):
        await repo.create_group(name)
    assert await repo.list_groups() == []


@pytest.mark.parametrize("duplicate", ["Sports", " Sports ", "SPORTS", "sports"])
async def test_duplicate_group_name_conflicts(repo, duplicate):
    await repo.create_group("Sports")

    with pytest.raises(ConflictError):
        await repo.create_group(duplicate)

    assert len(await repo.list_groups()) == 1


@pytest.mark.parametrize(("first", "duplicate"), [
    ("Ärger", "ärger"),
    ("ÄRGER", " ärger "),
    ("Straße", "STRASSE"),
])
async def test_duplicate_non_ascii_group_name_conflicts(repo, first, duplicate):
    await repo.create_group(first)

    with pytest.raises(ConflictError):
        await repo.create_group(duplicate)

    assert [g.name for g in await repo.list_groups()] == [first]


async def test_groups_listed_by_name(repo):
    for name in ("Weather", "Finance", "Music"):
        await repo.create_group(name)

    names = [g.name for g in await repo.list_groups()]

    assert names == ["Finance", "Music", "Weather"]


async def test_term_count_reflects_owned_terms(repo):
    sports = await repo.create_group("Sports")
    music = await repo.create_group("Music")
    await repo.create_term("football", sports.id)
    await repo.create_term("tennis", sports.id)

    counts = {g.name: g.term_count for g in await repo.list_groups()}

    assert counts == {"Music": 0, "Sports": 2}
    assert music.term_count == 0


async def test_delete_group_cascades_to_exactly_its_terms(repo):
    sports = await repo.create_group("Sports")
    music = await repo.create_group("Music")
    for t in ("football", "tennis", "golf"):
        await repo.create_term(t, sports.id)
    kept = await repo.create_term("jazz", music.id)

    await repo.delete_group(sports.id)

    assert [g.name for g in await repo.list_groups()] == ["Music"]
    with pytest.raises(NotFoundError):
        await repo.list_terms_by_group(sports.id)
    assert await repo.list_terms_by_group(music.id) == [kept]


async def test_delete_missing_group_is_not_found(repo):
    with pytest.raises(NotFoundError):
        await repo.delete_group(GroupId(999))


async def test_list_terms_for_missing_group_is_not_found(repo):
    with pytest.raises(NotFoundError):
        await repo.list_terms_by_group(GroupId(999))


OUT_OF_RANGE_IDS = [0, -1, 2**31, 10**20]


@pytest.mark.parametrize("bad_id", OUT_OF_RANGE_IDS)
async def test_out_of_range_ids_are_not_found(repo, bad_id):
    with pytest.raises(NotFoundError):
        await repo.list_terms_by_group(GroupId(bad_id))
    with pytest.raises(NotFoundError):
        await repo.delete_group(GroupId(bad_id))
    with pytest.raises(NotFoundError):
        await repo.delete_term(TermId(bad_id))


@pytest.mark.parametrize("bad_id", OUT_OF_RANGE_IDS)
async def test_create_term_with_out_of_range_group_is_rejected(repo, bad_id):
    with pytest.raises(ValidationError) as exc_info:
        await repo.create_term("football", GroupId(bad_id))
    assert exc_info.value.field == "searchGroupId"


async def test_terms_sorted_by_text(repo):
    group = await repo.create_group("Sports")
    for t in ("tennis", "football", "golf", "basketball"):
        await repo.create_term(t, group.id)

    terms = [t.term for t in await repo.list_terms_by_group(group.id)]

    assert terms == ["basketball", "football", "golf", "tennis"]


async def test_create_term_with_unknown_group_is_rejected(repo):
    group = await repo.create_group("Sports")

    with pytest.raises(ValidationError) as exc_info:
        await repo.create_term("football", GroupId(group.id + 100))

    assert exc_info.value.message == "Invalid SearchGroupId"
    assert await repo.list_terms_by_group(group.id) == []


async def test_create_term_rejects_blank_text(repo):
    group = await repo.create_group("Sports")
    with pytest.raises(ValidationError):
        await repo.create_term("   ", group.id)


async def test_create_term_trims_and_keeps_optional_fields(repo):
    group = await repo.create_group("Sports")
    start = datetime(2025, 8, 1, 9, 0)
    end = datetime(2025, 8, 31, 18, 0)

    record = await repo.create_term(
        "  football  ", group.id,
        start_date=start, end_date=end, output_query="site:bbc.co.uk",
    )

    assert record.term == "football"
    assert record.search_group_id == group.id
    assert record.start_date == start
    assert record.end_date == end
    assert record.output_query == "site:bbc.co.uk"
    assert await repo.list_terms_by_group(group.id) == [record]


async def test_create_term_stores_aware_dates_as_naive_utc(repo):
    group = await repo.create_group("Sports")
    aware = datetime(2025, 8, 1, 12, 0, tzinfo=timezone(timedelta(hours=3)))

    record = await repo.create_term("football", group.id, start_date=aware)

    assert record.start_date == datetime(2025, 8, 1, 9, 0)


async def test_delete_term(repo):
    group = await repo.create_group("Sports")
    football = await repo.create_term("football", group.id)
    tennis = await repo.create_term("tennis", group.id)

    await repo.delete_term(football.id)

    assert await repo.list_terms_by_group(group.id) == [tennis]


async def test_delete_missing_term_is_not_found(repo):
    with pytest.raises(NotFoundError):
        await repo.delete_term(TermId(999))


async def test_ping_reports_reachable(repo):
    assert await repo.ping() is True
