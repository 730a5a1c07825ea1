import pytest

from pseudoshim.content import AttributeContent, CounterContent, LiteralContent
from pseudoshim.extract import (
    PseudoKind,
    clean_selector,
    extract_pseudo_rules,
    is_universal,
    match_pseudo_selector,
)
from pseudoshim.options import PseudoShimOptions


def test_extracts_rules_in_source_order() -> None:
    css = """
    .preview-content h2::before { content: "#"; color: #333 !important; }
    .preview-content p { line-height: 1.75; }
    .preview-content blockquote:after { content: attr(cite); font-size: 12px }
    """

    rules = extract_pseudo_rules(css)

    assert [(rule.selector, rule.kind) for rule in rules] == [
        ("h2", PseudoKind.BEFORE),
        ("blockquote", PseudoKind.AFTER),
    ]
    assert rules[0].content == LiteralContent("#")
    assert dict(rules[0].styles) == {"color": "#333"}
    assert rules[1].content == AttributeContent("cite")
    assert dict(rules[1].styles) == {"font-size": "12px"}


def test_missing_content_defaults_to_empty_literal() -> None:
    (rule,) = extract_pseudo_rules("h3::after { border-bottom: 1px solid red; }")

    assert rule.content == LiteralContent("")
    assert dict(rule.styles) == {"border-bottom": "1px solid red"}


def test_counter_rule_keeps_descendant_chain() -> None:
    (rule,) = extract_pseudo_rules(
        "article.preview-content ol li::before { content: counter(item); }"
    )

    assert rule.selector == "ol li"
    assert rule.content == CounterContent("item")


def test_uppercase_and_legacy_pseudo_elements_are_recognized() -> None:
    rules = extract_pseudo_rules("H1:BEFORE { content: '>' } h2::After { content: '<' }")

    assert [(rule.selector, rule.kind) for rule in rules] == [
        ("H1", PseudoKind.BEFORE),
        ("h2", PseudoKind.AFTER),
    ]


def test_declarations_with_semicolons_in_strings_survive() -> None:
    (rule,) = extract_pseudo_rules('q::before { content: "a;b"; margin-right: 2px; }')

    assert rule.content == LiteralContent("a;b")
    assert dict(rule.styles) == {"margin-right": "2px"}


def test_selector_list_groups_components_by_pseudo_element() -> None:
    rules = extract_pseudo_rules(
        "h1::before, h2::before, h3::after, h4::before { content: '*'; color: red; }"
    )

    assert [(rule.selector, rule.kind) for rule in rules] == [
        ("h1, h2, h4", PseudoKind.BEFORE),
        ("h3", PseudoKind.AFTER),
    ]
    assert all(rule.content == LiteralContent("*") for rule in rules)
    assert all(dict(rule.styles) == {"color": "red"} for rule in rules)


def test_mixed_selector_list_keeps_both_pseudo_elements() -> None:
    rules = extract_pseudo_rules("h1::before, h2::after { content: '~'; }")

    assert [(rule.selector, rule.kind) for rule in rules] == [
        ("h1", PseudoKind.BEFORE),
        ("h2", PseudoKind.AFTER),
    ]


def test_container_only_selector_is_skipped() -> None:
    assert extract_pseudo_rules(".preview-content::before { content: 'x'; }") == []


def test_malformed_blocks_are_skipped() -> None:
    css = "li::before { content: '-'; } h2::after { content: 'x'; color: red;"

    rules = extract_pseudo_rules(css)

    assert [rule.selector for rule in rules] == ["li"]


def test_empty_css_yields_no_rules() -> None:
    assert extract_pseudo_rules("") == []
    assert extract_pseudo_rules(None) == []


def test_custom_container_classes() -> None:
    options = PseudoShimOptions(container_classes=("wechat-root", "md"))

    (rule,) = extract_pseudo_rules(
        "section.wechat-root .md > h2::before { content: ''; }", options
    )

    assert rule.selector == "h2"


def test_match_pseudo_selector_rejects_plain_rules() -> None:
    assert match_pseudo_selector("p a:hover") == ()
    assert match_pseudo_selector("li::marker") == ()


def test_clean_selector_leaves_other_classes_alone() -> None:
    assert clean_selector(".preview-content  .note   p", ("preview-content",)) == ".note p"
    assert clean_selector(".preview-contents p", ("preview-content",)) == ".preview-contents p"


def test_universal_selectors_are_skipped() -> None:
    css = """
    *, *::before, *::after { box-sizing: border-box; }
    .preview-content *:first-child::before { content: ''; }
    ul > :last-child::after { content: '.'; }
    .preview-content li::before, *::before { content: '-'; }
    """

    rules = extract_pseudo_rules(css)

    assert [(rule.selector, rule.kind) for rule in rules] == [("li", PseudoKind.BEFORE)]


@pytest.mark.parametrize(
    ("selector", "expected"),
    [
        ("*", True),
        ("ol > *", True),
        ("*:hover", True),
        (":first-child", True),
        ("li", False),
        ("ol *.note", False),
        (".note", False),
        ("[data-tip]", False),
        ("li:first-child", False),
    ],
)
def test_is_universal(selector: str, expected: bool) -> None:
    assert is_universal(selector) is expected
