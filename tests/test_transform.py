from bs4 import BeautifulSoup

from pseudoshim.options import PseudoShimOptions
from pseudoshim.styles import parse_declarations
from pseudoshim.transform import ProcessedDocument, process_pseudo_elements

THEME_CSS = """
.preview-content h2 { font-size: 20px; }
.preview-content h2::before {
  content: "";
  position: absolute;
  left: -12px;
  width: 4px;
  height: 1em;
  background: #07c160;
}
.preview-content ol li::before { content: counter(item) "."; color: #07c160; }
.preview-content blockquote::after { content: "\\201D"; font-size: 2em; }
"""


def test_empty_css_returns_html_unchanged() -> None:
    html = "<p>Hello</p>"

    result = process_pseudo_elements(html, "")

    assert result == ProcessedDocument(html=html, css="")
    assert process_pseudo_elements(html, None) == ProcessedDocument(html=html, css="")


def test_css_without_pseudo_rules_is_a_no_op() -> None:
    html = "<p class=lead>Hello <b>world</b>"
    css = "p { color: red; }\n.lead { font-weight: bold; }\n"

    result = process_pseudo_elements(html, css)

    assert result.html == html
    assert result.css == css


def test_ordered_list_counters_end_to_end() -> None:
    css = "ol li::before { content: counter(item); color: blue; }"

    result = process_pseudo_elements("<ol><li>a</li><li>b</li></ol>", css)

    soup = BeautifulSoup(result.html, "html.parser")
    markers = soup.find_all("span", class_="pseudo-before")
    assert [marker.get_text() for marker in markers] == ["1", "2"]
    for marker in markers:
        assert parse_declarations(marker["style"])["color"] == "blue"
    assert "::before" not in result.css
    assert result.css.strip() == ""


def test_unmatched_rule_only_changes_css() -> None:
    html = "<p>No tables here</p>"
    css = "p { margin: 0; }\ntable td::after { content: '|'; }\n"

    result = process_pseudo_elements(html, css)

    assert result.html == html
    assert result.css == "p { margin: 0; }\n\n"


def test_theme_conversion() -> None:
    html = (
        "<h2>Intro</h2>"
        "<ol><li>one</li><li>two</li></ol>"
        "<blockquote><p>quoted</p></blockquote>"
    )

    result = process_pseudo_elements(html, THEME_CSS)

    soup = BeautifulSoup(result.html, "html.parser")
    bar = soup.h2.contents[0]
    assert bar.get_text() == ""
    bar_styles = parse_declarations(bar["style"])
    assert bar_styles["left"] == "-12px"
    assert bar_styles["top"] == "0"
    assert "right" not in bar_styles
    assert bar_styles["background"] == "#07c160"
    assert [li.contents[0].get_text() for li in soup.find_all("li")] == ["1.", "2."]
    assert soup.blockquote.contents[-1].get_text() == "”"
    assert result.css.strip() == ".preview-content h2 { font-size: 20px; }"


def test_reprocessing_with_original_css_is_stable() -> None:
    html = "<h2>Intro</h2><ol><li>one</li><li>two</li></ol>"

    first = process_pseudo_elements(html, THEME_CSS)
    second = process_pseudo_elements(first.html, THEME_CSS)

    assert second == first


def test_reprocessing_with_cleaned_css_adds_nothing() -> None:
    first = process_pseudo_elements("<ol><li>one</li></ol>", THEME_CSS)

    second = process_pseudo_elements(first.html, first.css)

    assert second.html == first.html
    assert second.css == first.css


def test_same_inputs_give_equal_outputs() -> None:
    html = "<ol><li>one</li><li>two</li></ol>"

    assert process_pseudo_elements(html, THEME_CSS) == process_pseudo_elements(
        html, THEME_CSS
    )


def test_custom_marker_configuration() -> None:
    options = PseudoShimOptions(marker_tag="i", marker_class_prefix="shim-")

    result = process_pseudo_elements("<h3>x</h3>", "h3::after { content: '!'; }", options)

    marker = BeautifulSoup(result.html, "html.parser").h3.contents[-1]
    assert marker.name == "i"
    assert marker["class"] == ["shim-after"]


def test_important_content_renders_without_the_marker() -> None:
    result = process_pseudo_elements("<h2>x</h2>", 'h2::before { content: "#" !important; }')

    marker = BeautifulSoup(result.html, "html.parser").h2.contents[0]
    assert marker.get_text() == "#"


def test_universal_reset_leaves_html_unchanged() -> None:
    html = "<h2>a</h2><p>b <em>c</em></p>"
    css = "*::before, *::after { box-sizing: border-box; }\np { margin: 0; }"

    result = process_pseudo_elements(html, css)

    assert result == ProcessedDocument(html=html, css="\np { margin: 0; }")


def test_mixed_selector_list_injects_both_markers() -> None:
    result = process_pseudo_elements(
        "<h1>a</h1><h2>b</h2>", "h1::before, h2::after { content: '~'; }"
    )

    soup = BeautifulSoup(result.html, "html.parser")
    assert soup.h1.contents[0]["data-pseudo-element"] == "before"
    assert soup.h2.contents[-1]["data-pseudo-element"] == "after"
    assert result.css == ""
