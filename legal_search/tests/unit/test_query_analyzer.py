import pytest

from legal_search.core.query_analyzer import QueryAnalyzer, extract_keywords


@pytest.fixture
def analyzer():
    return QueryAnalyzer()


def test_extracts_act_and_section_references(analyzer):
    refs = analyzer.extract_legal_references("What is the penalty under RA 11058 Section 28?")

    assert [(r.type, r.identifier) for r in refs] == [("ra", "11058"), ("section", "28")]
    assert refs[0].full_reference == "RA 11058"
    assert refs[1].full_reference == "Section 28"


def test_recognizes_reference_variants(analyzer):
    text = "Compare Republic Act No. 11058, R.A. 11058, Rule 1030, DO 252 and LA 7"
    refs = analyzer.extract_legal_references(text)

    assert [(r.type, r.identifier) for r in refs] == [
        ("ra", "11058"),
        ("ra", "11058"),
        ("rule", "1030"),
        ("do", "252"),
        ("la", "7"),
    ]


def test_section_reference_keeps_subsection_letter(analyzer):
    refs = analyzer.extract_legal_references("See section 28(a) and Section 1033.01")

    assert [r.identifier for r in refs] == ["28(a)", "1033.01"]
    assert refs[0].full_reference == "Section 28(a)"


def test_rule_requires_four_digits(analyzer):
    assert analyzer.extract_legal_references("Rule 12 applies") == []


def test_no_references_in_plain_question(analyzer):
    assert analyzer.extract_legal_references("Who needs a safety officer?") == []
    assert analyzer.extract_legal_references("") == []


def test_currency_amount(analyzer):
    query = analyzer.extract_numerical_query("first offense for a small enterprise is PHP 100,000")

    assert query.value == 100000
    assert query.unit == "PHP"
    assert query.operator == "exact"


def test_currency_with_decimals_and_peso_sign(analyzer):
    query = analyzer.extract_numerical_query("a fine of ₱ 1,500.50")

    assert query.value == pytest.approx(1500.50)
    assert query.unit == "PHP"


@pytest.mark.parametrize("text, value, unit", [
    ("Is 40 hours of training enough?", 40, "hours"),
    ("a company with 200 employees", 200, "workers"),
    ("report within 30 calendar days", 30, "days"),
    ("an 8hr shift", 8, "hours"),
])
def test_count_patterns(analyzer, text, value, unit):
    query = analyzer.extract_numerical_query(text)

    assert query.value == value
    assert query.unit == unit
    assert query.operator == "exact"


def test_currency_takes_priority_over_counts(analyzer):
    query = analyzer.extract_numerical_query("10 workers fined PHP 50,000 after 3 days")

    assert query.unit == "PHP"
    assert query.value == 50000


def test_hours_take_priority_over_workers(analyzer):
    query = analyzer.extract_numerical_query("10 workers need 8 hours of orientation")

    assert query.unit == "hours"
    assert query.value == 8


def test_unparsable_amount_falls_through_to_later_amount(analyzer):
    query = analyzer.extract_numerical_query("P, then PHP 5,000 for 8 hours")

    assert query.unit == "PHP"
    assert query.value == 5000


def test_currency_marker_must_start_a_word(analyzer):
    assert analyzer.extract_numerical_query("list the top 10 hazards") is None
    assert analyzer.extract_numerical_query("a fine of P5,000").value == 5000


def test_no_numerical_query(analyzer):
    assert analyzer.extract_numerical_query("What does the committee do?") is None
    assert analyzer.extract_numerical_query("") is None


def test_keywords_drop_stop_words_and_short_tokens():
    assert extract_keywords("What is the training hours for a Safety Officer?") == [
        "training", "hours", "safety", "officer",
    ]


def test_keywords_drop_filipino_stop_words():
    assert extract_keywords("Ano ang parusa para sa employer kung walang PPE?") == [
        "parusa", "employer", "walang", "ppe",
    ]


def test_keywords_can_be_empty():
    assert extract_keywords("What is it?") == []
    assert extract_keywords("") == []


def test_analyze_combines_all_hints(analyzer):
    analysis = analyzer.analyze("Under Rule 1030, is 40 hours of training required?")

    assert [(r.type, r.identifier) for r in analysis.legal_references] == [("rule", "1030")]
    assert analysis.numerical_query.value == 40
    assert "training" in analysis.keywords


def test_to_request_maps_references_to_filters(analyzer):
    request = analyzer.to_request("What is the penalty under RA 11058 Section 28?")

    assert request.query == "What is the penalty under RA 11058 Section 28?"
    assert request.section_numbers == ["28"]
    assert request.law_ids == ["ra11058"]
    assert request.numerical_query is None
    assert request.embedding is None


def test_to_request_builds_law_ids_for_every_law_type(analyzer):
    request = analyzer.to_request("Rule 1030, DO 252 and LA 7")

    assert request.law_ids == ["rule1030", "do252", "la7"]
    assert request.section_numbers == []


def test_explicit_filters_override_analysis(analyzer):
    request = analyzer.to_request(
        "RA 11058 Section 28",
        section_numbers=["29"],
        law_ids=["rule1020"],
        limit=3,
    )

    assert request.section_numbers == ["29"]
    assert request.law_ids == ["rule1020"]
    assert request.limit == 3
