import pytest

from tvdeck.models import Channel
from tvdeck.services.browse import (
    ALL_GROUPS,
    ChannelQuery,
    filter_channels,
    page,
    sort_channels,
)


def _channels():
    return [
        Channel(id="1", name="BBC One", url="http://u/1", group="News"),
        Channel(id="2", name="espn", url="http://u/2", group="Sports"),
        Channel(id="3", name="CNN", url="http://u/3", group="News"),
        Channel(id="4", name="Cartoon", url="http://u/4", group="Kids"),
    ]


def test_filter_all_groups_keeps_everything():
    assert [c.id for c in filter_channels(_channels())] == ["1", "2", "3", "4"]


def test_filter_by_group():
    assert [c.id for c in filter_channels(_channels(), group="News")] == ["1", "3"]


def test_filter_group_is_exact_match():
    assert filter_channels(_channels(), group="news") == []


def test_search_is_case_insensitive_substring():
    assert [c.id for c in filter_channels(_channels(), search="bbc")] == ["1"]
    assert [c.id for c in filter_channels(_channels(), search="ESP")] == ["2"]


def test_blank_search_is_ignored():
    assert len(filter_channels(_channels(), search="   ")) == 4


def test_group_and_search_combined():
    assert [c.id for c in filter_channels(_channels(), group="News", search="n")] == ["1", "3"]
    assert filter_channels(_channels(), group="Kids", search="bbc") == []


def test_sort_by_name_ignores_case():
    assert [c.name for c in sort_channels(_channels(), by="name")] == ["BBC One", "Cartoon", "CNN", "espn"]


def test_sort_by_group_then_name():
    assert [c.id for c in sort_channels(_channels(), by="group")] == ["4", "1", "3", "2"]


def test_sort_unknown_option():
    with pytest.raises(ValueError):
        sort_channels(_channels(), by="url")  # type: ignore[arg-type]


def test_page_limits_results():
    assert [c.id for c in page(_channels(), 2)] == ["1", "2"]
    assert len(page(_channels(), 10)) == 4


def test_page_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        page(_channels(), 0)


def test_query_show_more_and_reset():
    q = ChannelQuery.first_page(page_size=1)
    visible, total = q.apply(_channels())
    assert [c.id for c in visible] == ["1"]
    assert total == 4

    q = q.show_more()
    visible, _ = q.apply(_channels())
    assert [c.id for c in visible] == ["1", "2"]

    q = q.with_group("News")
    assert q.limit == 1
    visible, total = q.apply(_channels())
    assert [c.id for c in visible] == ["1"]
    assert total == 2

    q = q.show_more().with_search("cnn")
    assert q.limit == 1
    visible, total = q.apply(_channels())
    assert [c.id for c in visible] == ["3"]
    assert total == 1


def test_query_defaults():
    q = ChannelQuery()
    assert q.group == ALL_GROUPS
    assert q.limit == 50
