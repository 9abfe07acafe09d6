import pytest

from pageshots.errors import NoUrlsError
from pageshots.sizes import parse_sizes
from pageshots.tasks import expand_tasks, normalize_url


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("example.com", "https://example.com"),
        ("http://example.com", "http://example.com"),
        ("https://example.com/a?b=1", "https://example.com/a?b=1"),
        ("localhost:8000/docs", "https://localhost:8000/docs"),
        ("ftp://example.com", "https://ftp://example.com"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_expand_tasks_is_size_major():
    sizes = parse_sizes(["100x100", "200x200"])
    tasks = expand_tasks(["a.com", "http://b.com", "c.com"], sizes)

    assert len(tasks) == 6
    assert [(t.size_index, t.url_index) for t in tasks] == [
        (0, 0),
        (0, 1),
        (0, 2),
        (1, 0),
        (1, 1),
        (1, 2),
    ]
    assert [t.url for t in tasks[:3]] == [
        "https://a.com",
        "http://b.com",
        "https://c.com",
    ]
    assert {t.size.label for t in tasks[3:]} == {"200x200"}


def test_expand_tasks_every_pair_once():
    sizes = parse_sizes(["1x1", "2x2", "3x3", "4x4"])
    urls = [f"site{i}.org" for i in range(5)]
    pairs = [(t.url_index, t.size_index) for t in expand_tasks(urls, sizes)]

    assert len(pairs) == len(set(pairs)) == 20
    assert {u for u, _ in pairs} == set(range(5))
    assert {s for _, s in pairs} == set(range(4))


def test_expand_tasks_keeps_malformed_hosts():
    tasks = expand_tasks(["not a host"], parse_sizes([]))
    assert tasks[0].url == "https://not a host"


def test_expand_tasks_requires_urls():
    with pytest.raises(NoUrlsError):
        expand_tasks([], parse_sizes([]))
