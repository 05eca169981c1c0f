from orgboard.services.crawl.spiders.search_spider import CompanySearchSpider, extract_quoted_path
from orgboard.services.crawl.base import PatternMatchError

from pathlib import Path

import pytest
from bs4 import BeautifulSoup


def read_fixture(name: str) -> str:
    p = Path(__file__).parent / "fixtures" / name
    return p.read_text(encoding="utf-8")


def entry(name: str, onclick: str) -> str:
    return (
        f'<li><div><div><div class="companyTitle" onclick="{onclick}">'
        f'<span class="nom_entr">{name}</span></div></div></div></li>'
    )


def results_page(*entries: str) -> str:
    return f'<html><body><div id="results"><ul>{"".join(entries)}</ul></div></body></html>'


def test_search_sample_skips_unusable_entries():
    spider = CompanySearchSpider()
    out = spider.parse_html(read_fixture("search_sample.html"), "example")
    assert out == [
        ("Example Corp", "https://www.theofficialboard.jp/company/board/example-corp/1234"),
        ("Example Holdings", "https://www.theofficialboard.jp/company/board/example-holdings/5678"),
    ]


def test_malformed_action_is_skipped_and_order_kept():
    html = results_page(
        entry("Bad Co", "goTo(/company/board/bad/1)"),
        entry("Good Co", "location.href='/company/board/good/2'"),
    )
    out = CompanySearchSpider().parse_html(html, "co")
    assert out == [("Good Co", "https://www.theofficialboard.jp/company/board/good/2")]


def test_no_entries_yields_empty_list():
    assert CompanySearchSpider().parse_html("<html><body><p>No results</p></body></html>", "nothing") == []


def test_entry_without_action_attribute_is_skipped():
    html = results_page(
        '<li><div><div><div class="companyTitle"><span class="nom_entr">Quiet Co</span></div></div></div></li>'
    )
    assert CompanySearchSpider().parse_html(html) == []


def test_base_url_is_configurable():
    spider = CompanySearchSpider(base_url="http://localhost:8000/")
    assert spider.search_url() == "http://localhost:8000/company/search"
    out = spider.parse_html(results_page(entry("Local", "go('/b/1')")))
    assert out == [("Local", "http://localhost:8000/b/1")]


def test_accepts_parsed_document():
    soup = BeautifulSoup(results_page(entry("Soup Co", "go('/b/9')")), "html.parser")
    assert CompanySearchSpider().extract_candidates(soup, "soup") == [("Soup Co", "https://www.theofficialboard.jp/b/9")]


def test_extract_quoted_path():
    assert extract_quoted_path("a('/x/1', '/y/2')") == "/x/1"
    with pytest.raises(PatternMatchError):
        extract_quoted_path("noop()")
    with pytest.raises(PatternMatchError):
        extract_quoted_path(None)


def test_paths_are_resolved_against_the_origin():
    html = results_page(
        entry("Relative Co", "go('company/board/relative/1')"),
        entry("Absolute Co", "go('https://mirror.test/company/board/absolute/2')"),
    )
    out = CompanySearchSpider().parse_html(html)
    assert out == [
        ("Relative Co", "https://www.theofficialboard.jp/company/board/relative/1"),
        ("Absolute Co", "https://mirror.test/company/board/absolute/2"),
    ]
