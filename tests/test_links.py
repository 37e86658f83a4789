import re

import pytest

from mos_patch.core.discovery import (
    derive_filename, detail_links, detail_url, extract_candidates, is_protected, search_url,
)

from conftest import link, search_page


def test_regexp_keeps_only_matching_release():
    html = search_page("p6880880_112000_Linux-x86-64", "p6880880_121010_Linux-x86-64")

    urls, protected = extract_candidates(html, ".*1120.*")

    assert urls == [link("p6880880_112000_Linux-x86-64")]
    assert protected is False


def test_filter_is_a_whole_token_match():
    html = search_page("p6880880_112000_Linux-x86-64")

    assert extract_candidates(html, "1120")[0] == []
    assert extract_candidates(html, "p6880880_.*")[0] == [link("p6880880_112000_Linux-x86-64")]


def test_filter_is_case_sensitive():
    html = search_page("p6880880_112000_Linux-x86-64")

    assert extract_candidates(html, ".*linux.*")[0] == []


@pytest.mark.parametrize("pattern", ["", ".*", re.compile(".*")])
def test_match_all_returns_every_link_in_page_order(pattern):
    names = ["p1_a", "p1_b", "p1_c"]
    urls, _ = extract_candidates(search_page(*names), pattern)
    assert urls == [link(n) for n in names]


def test_page_without_links_is_not_an_error():
    assert extract_candidates("<html>No results</html>", ".*") == ([], False)


def test_protected_marker():
    html = search_page("p1_a", protected=True)
    urls, protected = extract_candidates(html, ".*")
    assert protected is True
    assert urls == [link("p1_a")]
    assert is_protected(html)
    assert not is_protected(search_page("p1_a"))


def test_detail_links_from_multi_part_markers():
    html = search_page(details=(
        "/Orion/PatchDetails/process_form?aru=1&patch_num=12978712",
        "/Orion/PatchDetails/process_form?aru=2&patch_num=12978712",
    ))

    paths = detail_links(html)

    assert paths == [
        "/Orion/PatchDetails/process_form?aru=1&patch_num=12978712",
        "/Orion/PatchDetails/process_form?aru=2&patch_num=12978712",
    ]
    assert detail_url(paths[0]) == (
        "https://updates.oracle.com/Orion/PatchDetails/process_form?aru=1&patch_num=12978712"
    )


def test_show_details_without_multi_part_label_is_ignored():
    html = "<a href='javascript:showDetails(\"/Orion/PatchDetails/process_form?x=1\")'>Details</a>"
    assert detail_links(html) == []


def test_filename_is_stable_across_query_strings():
    base = "https://updates.oracle.com/Orion/Download/process_form/p6880880_112000_Linux-x86-64.zip"
    assert derive_filename(base + "?x=1") == "p6880880_112000_Linux-x86-64.zip"
    assert derive_filename(base + "?aru=9&patch_file=other.zip") == "p6880880_112000_Linux-x86-64.zip"
    assert derive_filename(base) == "p6880880_112000_Linux-x86-64.zip"


def test_filename_of_non_download_link():
    with pytest.raises(ValueError):
        derive_filename("https://updates.oracle.com/index.html")


def test_search_url_carries_patch_and_platform():
    url = search_url("6880880", "226P")
    assert url.startswith("https://updates.oracle.com/Orion/SimpleSearch/process_form?")
    assert "search_type=patch" in url
    assert "patch_number=6880880" in url
    assert "plat_lang=226P" in url
