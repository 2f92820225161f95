"""Unit tests for SearchService (src/notekeeper/core/services/search_service.py)."""

import pytest
from fastapi import HTTPException

from notekeeper.core.repositories.note_repository import NoteRepository
from notekeeper.core.services.search_service import SearchService


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "   "])
async def test_query_required(test_session, test_user, query):
    with pytest.raises(HTTPException) as exc_info:
        await SearchService(test_session).search_notes(test_user.id, query, 1, 20)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Search query is required"


@pytest.mark.asyncio
async def test_search_matches_title_content_and_tags(test_session, test_user, note_factory):
    by_title = await note_factory(test_user, title="Quarterly budget", content="numbers")
    by_content = await note_factory(test_user, title="Meeting", content="discuss the budget")
    by_tag = await note_factory(test_user, title="Misc", content="stuff", tags=["budget"])
    await note_factory(test_user, title="Holiday", content="beach")

    notes, meta = await SearchService(test_session).search_notes(test_user.id, " budget ", 1, 20)

    # tags outrank titles, titles outrank content
    assert [n.id for n in notes] == [by_tag.id, by_title.id, by_content.id]
    assert meta.total == 3


@pytest.mark.asyncio
async def test_search_is_case_insensitive(test_session, test_user, note_factory):
    note = await note_factory(test_user, title="Python Tips", content="...")

    notes, _ = await SearchService(test_session).search_notes(test_user.id, "PYTHON", 1, 20)

    assert [n.id for n in notes] == [note.id]


@pytest.mark.asyncio
async def test_search_any_term_matches(test_session, test_user, note_factory):
    apples = await note_factory(test_user, title="Apples", content="red")
    pears = await note_factory(test_user, title="Pears", content="green")

    notes, _ = await SearchService(test_session).search_notes(test_user.id, "apples pears", 1, 20)

    assert {n.id for n in notes} == {apples.id, pears.id}


@pytest.mark.asyncio
async def test_search_only_returns_accessible_notes(
    test_session, test_user, other_user, third_user, note_factory
):
    mine = await note_factory(test_user, title="secret plan", content="mine")
    shared = await note_factory(other_user, title="secret recipe", content="shared")
    await note_factory(third_user, title="secret diary", content="private")
    await NoteRepository(test_session).add_shares(shared, [test_user.id])

    notes, meta = await SearchService(test_session).search_notes(test_user.id, "secret", 1, 20)

    assert {n.id for n in notes} == {mine.id, shared.id}
    assert meta.total == 2


@pytest.mark.asyncio
async def test_search_wildcards_are_literal(test_session, test_user, note_factory):
    literal = await note_factory(test_user, title="100% done", content="x")
    await note_factory(test_user, title="1000 things", content="y")

    notes, _ = await SearchService(test_session).search_notes(test_user.id, "100%", 1, 20)

    assert [n.id for n in notes] == [literal.id]


@pytest.mark.asyncio
async def test_search_pagination(test_session, test_user, note_factory):
    for i in range(3):
        await note_factory(test_user, title=f"report {i}", content="text")

    notes, meta = await SearchService(test_session).search_notes(test_user.id, "report", 2, 2)

    assert len(notes) == 1
    assert meta.total == 3
    assert meta.total_pages == 2
    assert meta.previous_page == 1
    assert meta.next_page is None
