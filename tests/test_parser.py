"""Tests for html_parser.parser (segmentacja dokumentu na jednostki)."""
import pytest
from bs4 import BeautifulSoup

from data_model.confessions import IdCounters, Synonym
from html_parser.parser import (
    ConfessionFormatError,
    file_name_from_url,
    flatten,
    heading_text,
    item_label,
    parse_confession,
)
from scripture import UnresolvedReferenceError


def _link(label: str, target: str = "x") -> str:
    return f'<a href="https://goto.bible/{target}">{label}</a>'


def _units(result) -> list[tuple[int, str, str, str]]:
    return [(u.id, u.file_name, u.title, u.contents) for u in result.search_index]


class TestConfession:
    def test_attributes(self, make_page) -> None:
        html = make_page(
            "Heidelberg Catechism", "<p>Text.</p>",
            year="1563", country="Germany", tradition="Reformed",
        )
        c = parse_confession(html, "heidelberg.html").confession

        assert c.id == 1
        assert c.title == "Heidelberg Catechism"
        assert c.file_name == "heidelberg.html"
        assert (c.country, c.tradition, c.year) == ("Germany", "Reformed", 1563)
        assert c.quiz is False

    def test_quiz_flag(self, make_page) -> None:
        html = make_page("Shorter Catechism", "<p>Text.</p>", quiz="true")
        assert parse_confession(html, "wsc.html").confession.quiz is True

    def test_title_entities_decoded(self, make_page) -> None:
        html = make_page("Faith &amp; Order", "<p>Text.</p>")
        assert parse_confession(html, "f.html").confession.title == "Faith & Order"

    def test_missing_optional_attributes(self) -> None:
        html = '<title>Creed</title><article id="main" data-year="325"><p>We believe.</p></article>'
        c = parse_confession(html, "nicene.html").confession

        assert (c.country, c.tradition, c.year) == ("", "", 325)


class TestMalformedInput:
    def test_missing_title(self) -> None:
        html = '<article id="main" data-year="1"><p>x</p></article>'
        with pytest.raises(ConfessionFormatError, match="title"):
            parse_confession(html, "a.html")

    def test_missing_article(self) -> None:
        html = '<title>T</title><article id="other" data-year="1"><p>x</p></article>'
        with pytest.raises(ConfessionFormatError, match="article#main"):
            parse_confession(html, "a.html")

    def test_missing_year(self) -> None:
        html = '<title>T</title><article id="main"><p>x</p></article>'
        with pytest.raises(ConfessionFormatError, match="data-year"):
            parse_confession(html, "a.html")

    def test_year_not_integer(self, make_page) -> None:
        html = make_page("T", "<p>x</p>", year="MDCXLVI")
        with pytest.raises(ConfessionFormatError) as excinfo:
            parse_confession(html, "a.html")
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_resolver_failure_is_fatal(self, make_page) -> None:
        html = make_page("T", f"<p>See {_link('ibid.')}.</p>")
        with pytest.raises(UnresolvedReferenceError):
            parse_confession(html, "a.html")


class TestCatechism:
    def test_list_item_closes_preceding_unit(self, make_page) -> None:
        html = make_page(
            "Heidelberg Catechism",
            "<p>Lord's Day 1.</p>"
            "<ol><li id=\"q1\">What is thy only comfort in life and death?</li></ol>"
            "<p>That I am not my own.</p>",
        )
        result = parse_confession(html, "heidelberg.html")

        assert _units(result) == [
            (1, "heidelberg.html#q1", "Heidelberg Catechism: Question & Answer 1",
             "Lord's Day 1. What is thy only comfort in life and death?"),
            (2, "heidelberg.html", "Heidelberg Catechism: Question & Answer 1",
             "That I am not my own."),
        ]
        assert result.counters.search_index == 2

    def test_answers_between_items_join_next_item(self, make_page) -> None:
        html = make_page(
            "Westminster Shorter Catechism",
            "<ol>"
            "<li id=\"q1\">What is the chief end of man?</li>"
            "<li id=\"q2\">What rule hath God given?</li>"
            "</ol>",
        )
        result = parse_confession(html, "wsc.html")

        assert _units(result) == [
            (1, "wsc.html#q1", "Westminster Shorter Catechism: Question & Answer 1",
             "What is the chief end of man?"),
            (2, "wsc.html#q2", "Westminster Shorter Catechism: Question & Answer 2",
             "What rule hath God given?"),
        ]

    def test_articles_title_heuristic(self, make_page) -> None:
        html = make_page(
            "The Thirty-Nine Articles",
            "<ol><li id=\"art12\">Of Good Works.</li></ol>",
        )
        result = parse_confession(html, "39.html")

        assert _units(result) == [
            (1, "39.html#art12", "The Thirty-Nine Articles: Article 12", "Of Good Works."),
        ]

    def test_confession_title_heuristic(self) -> None:
        assert item_label("The Belgic Confession", "3") == "Article 3"
        assert item_label("Canons of Dort", "3") == "Question & Answer 3"
        assert item_label("ARTICLES of Religion", "7") == "Article 7"

    def test_item_title_override(self, make_page) -> None:
        html = make_page(
            "Heidelberg Catechism",
            "<ol><li id=\"q129\" data-title=\"Amen\">What doth the word Amen signify?</li></ol>",
        )
        result = parse_confession(html, "h.html")

        assert result.search_index[0].title == "Heidelberg Catechism: Amen"

    def test_item_without_digits_keeps_title(self, make_page) -> None:
        html = make_page(
            "Heidelberg Catechism",
            "<ol><li id=\"intro\">Introduction text.</li></ol>",
        )
        result = parse_confession(html, "h.html")

        assert _units(result) == [
            (1, "h.html#intro", "Heidelberg Catechism", "Introduction text."),
        ]

    def test_nested_list_content_and_references(self, make_page) -> None:
        html = make_page(
            "Heidelberg Catechism",
            "<ol><li id=\"q1\">Which are these?"
            "<ol>"
            f"<li>First, <b>my</b> sins ({_link('Romans 3:23')}).</li>"
            f"<li>Second, my deliverance ({_link('John 17:3')}).</li>"
            "</ol>"
            "</li></ol>",
        )
        result = parse_confession(html, "h.html")

        assert result.search_index[0].contents == (
            "Which are these? First, my sins. Second, my deliverance."
        )
        assert [(r.book, r.chapter_number, r.search_index_id) for r in result.scripture_index] == [
            ("Romans", 3, 1),
            ("John", 17, 1),
        ]


class TestHeadings:
    def test_headings_set_title_and_open_units(self, make_page) -> None:
        html = make_page(
            "Westminster Confession of Faith",
            "<h3 id=\"ch1\">[Chapter I. Of the Holy Scripture.]</h3>"
            "<p>Although the light of nature.</p>"
            "<h3 id=\"ch2\">Chapter II. Of God.</h3>"
            "<p>There is but one only.</p>",
        )
        result = parse_confession(html, "wcf.html")

        assert _units(result) == [
            (1, "wcf.html#ch1",
             "Westminster Confession of Faith: Chapter I. Of the Holy Scripture",
             "Although the light of nature."),
            (2, "wcf.html#ch2", "Westminster Confession of Faith: Chapter II. Of God",
             "There is but one only."),
        ]

    def test_repeated_key_does_not_reopen(self, make_page) -> None:
        html = make_page(
            "Creed",
            "<h3 id=\"a\">First</h3><p>One.</p><h4 id=\"a\">Second</h4><p>Two.</p>",
        )
        result = parse_confession(html, "c.html")

        assert _units(result) == [(1, "c.html#a", "Creed: First", "One. Two.")]

    def test_data_title_overrides_heading(self, make_page) -> None:
        html = make_page(
            "Creed",
            "<h3 id=\"p\" data-title=\"Preface\">To the Christian Reader</h3><p>Text.</p>",
        )
        assert parse_confession(html, "c.html").search_index[0].title == "Creed: Preface"

    def test_data_title_on_plain_anchor_retitles_next_unit(self, make_page) -> None:
        html = make_page(
            "Creed",
            "<p>Before.</p><p id=\"x\" data-title=\"Preface\">Lost.</p><p>After.</p>",
        )
        result = parse_confession(html, "c.html")

        assert _units(result) == [
            (1, "c.html", "Creed", "Before."),
            (2, "c.html#x", "Creed: Preface", "After."),
        ]

    def test_low_headings_without_id_are_content(self, make_page) -> None:
        html = make_page(
            "Creed",
            "<h4>Not indexed</h4><h5>Of God.</h5><h6>Note.</h6><p>Body.</p>",
        )
        result = parse_confession(html, "c.html")

        assert _units(result) == [(1, "c.html", "Creed", "Of God. Note. Body.")]

    def test_heading_text_decoration(self) -> None:
        soup = BeautifulSoup("<h4>\n  [Article  XX.]\n</h4>", "html.parser")
        assert heading_text(soup.h4) == "Article XX"


class TestContent:
    def test_formatting_unwrapped_and_links_removed(self, make_page) -> None:
        html = make_page(
            "Creed",
            f"<p><b>Q.</b> All <i>have</i> sinned ({_link('Romans 3:23', 'Romans3:23')}).</p>",
        )
        result = parse_confession(html, "c.html")

        assert result.search_index[0].contents == "Q. All have sinned."
        ref = result.scripture_index[0]
        assert (ref.address, ref.reference) == ("https://goto.bible/Romans3:23", "Romans 3:23")

    def test_noindex_paragraph_skipped(self, make_page) -> None:
        html = make_page(
            "Creed",
            f"<p class=\"note noindex\">Editor's note {_link('John 1:1')}.</p><p>Kept.</p>",
        )
        result = parse_confession(html, "c.html")

        assert _units(result) == [(1, "c.html", "Creed", "Kept.")]
        assert result.scripture_index == []

    def test_blockquote_children_indexed(self, make_page) -> None:
        html = make_page("Creed", "<p>Before.</p><blockquote><p>Quoted.</p></blockquote>")
        assert parse_confession(html, "c.html").search_index[0].contents == "Before. Quoted."

    def test_div_contributes_only_references(self, make_page) -> None:
        html = make_page(
            "Creed",
            f"<p>Body.</p><div class=\"references\">Proofs: {_link('John 3:16')}</div>",
        )
        result = parse_confession(html, "c.html")

        assert result.search_index[0].contents == "Body."
        assert [r.book for r in result.scripture_index] == ["John"]

    def test_paragraph_with_nested_list(self, make_page) -> None:
        html = make_page(
            "Creed",
            "<p>The prayer hath two parts:"
            f"<ol><li>Petitions ({_link('Matthew 6:9')}).</li><li>Doxology.</li></ol>"
            "</p>",
        )
        result = parse_confession(html, "c.html")

        assert _units(result) == [
            (1, "c.html", "Creed", "The prayer hath two parts: Petitions. Doxology."),
        ]
        assert [(r.book, r.chapter_number, r.search_index_id) for r in result.scripture_index] == [
            ("Matthew", 6, 1),
        ]

    def test_entities_decoded_once(self, make_page) -> None:
        html = make_page("Creed", "<p>Write &amp;lt;b&amp;gt; and AT&amp;amp;T.</p>")
        result = parse_confession(html, "c.html")

        assert result.search_index[0].contents == "Write &lt;b&gt; and AT&amp;T."

    def test_paragraph_with_id_only_opens_unit(self, make_page) -> None:
        html = make_page("Creed", "<p>Before.</p><p id=\"x\">Lost.</p><p>After.</p>")
        result = parse_confession(html, "c.html")

        assert _units(result) == [
            (1, "c.html", "Creed", "Before."),
            (2, "c.html#x", "Creed", "After."),
        ]

    def test_synonyms_applied(self, make_page) -> None:
        html = make_page("Creed", "<p>I believe in the holy catholick Church.</p>")
        result = parse_confession(html, "c.html")
        assert result.search_index[0].contents == "I believe in the holy catholic Church."

    def test_custom_synonym_table(self, make_page) -> None:
        html = make_page("Creed", "<p>I believe in the holy catholick Church.</p>")
        result = parse_confession(html, "c.html", synonyms=(Synonym("holy", "sacred"),))
        assert result.search_index[0].contents == "I believe in the sacred catholick Church."

    def test_empty_document(self, make_page) -> None:
        result = parse_confession(make_page("Creed", "<p>  </p>"), "c.html", IdCounters(search_index=5))

        assert result.search_index == []
        assert result.counters.search_index == 5


class TestIdentifiers:
    _BODY = (
        f"<div>{_link('John 3:16')}</div>"
        "<h3 id=\"a1\">One</h3><p>First.</p>"
        "<h3 id=\"a2\">Two</h3>"
        "<h3 id=\"a3\">Three</h3><p>Third.</p>"
        f"<h3 id=\"a4\">Four</h3><div>{_link('Gen. 1:1')}</div>"
    )

    def test_ids_consecutive_and_contents_non_blank(self, make_page) -> None:
        result = parse_confession(make_page("Creed", self._BODY), "c.html", IdCounters(search_index=100))

        assert [u.id for u in result.search_index] == [101, 102]
        assert all(u.contents.strip() for u in result.search_index)
        assert result.counters.search_index == 102

    def test_references_only_point_to_emitted_units(self, make_page) -> None:
        result = parse_confession(make_page("Creed", self._BODY), "c.html")
        unit_ids = {u.id for u in result.search_index}

        # odnośnik przed pierwszą treścią trafia do pierwszej jednostki,
        # odnośnik w pustej jednostce końcowej jest odrzucany
        assert [(r.book, r.search_index_id) for r in result.scripture_index] == [("John", 1)]
        assert {r.search_index_id for r in result.scripture_index} <= unit_ids
        assert result.counters.scripture_index == 1

    def test_counters_threaded_across_documents(self, make_page) -> None:
        first = parse_confession(
            make_page("Creed", f"<p>A {_link('John 1:1')}.</p><h3 id=\"x\">X</h3><p>B.</p>"),
            "a.html",
        )
        second = parse_confession(
            make_page("Creed", f"<p>C {_link('John 1:1')}.</p>"),
            "b.html",
            first.counters,
        )

        assert [u.id for u in first.search_index] == [1, 2]
        assert [u.id for u in second.search_index] == [3]
        assert second.search_index[0].confession_id == second.confession.id == 2
        assert second.scripture_index[0].id == 2
        assert second.counters == IdCounters(confession=2, search_index=3, scripture_index=2)


class TestFlatten:
    def test_splices_children_without_mutating_tree(self) -> None:
        soup = BeautifulSoup(
            "<article><p>a</p><ol><li>b</li><ol><li>c</li></ol></ol>"
            "<blockquote><p>d</p></blockquote><ul><li>e</li></ul></article>",
            "html.parser",
        )
        article = soup.article
        before = str(article)

        flat = flatten(article.children)

        assert [n.name for n in flat] == ["p", "ol", "li", "ol", "li", "blockquote", "p", "ul"]
        assert str(article) == before


class TestFileNameFromUrl:
    def test_last_segment(self) -> None:
        assert file_name_from_url("https://example.org/creeds/nicene.html?x=1") == "nicene.html"

    def test_empty_path(self) -> None:
        assert file_name_from_url("https://example.org/") == "index.html"
