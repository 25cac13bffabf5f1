"""End-to-end tests for the deterministic analyzer."""

from __future__ import annotations

import copy

import pytest

from resume_ats.analysis import DEFAULT_RUBRIC, Analyzer, analyze
from resume_ats.analysis.analyzer import INVALID_CONTENT_KEYWORDS
from resume_ats.analysis.relevance import KeywordGraph
from resume_ats.config import AppConfig, AnalyzerConfig
from resume_ats.models.analysis import CheckStatus, Impact, ResultStatus


class TestScenarios:
    def test_empty_document(self):
        result = analyze({})
        assert result.score == 0
        assert result.status is ResultStatus.INVALID_CONTENT
        for check_id in ("contact", "summary", "experience"):
            assert result.get_check(check_id).status is CheckStatus.FAIL

    def test_strong_document(self, strong_document):
        result = analyze(strong_document)
        assert result.score >= 85
        assert result.status is ResultStatus.EXCELLENT
        assert result.checks_by_priority(1)
        assert all(c.status is CheckStatus.PASS for c in result.checks_by_priority(1))
        assert result.feedback
        assert not result.is_fallback
        assert result.source == "rules"

    def test_strong_document_three_roles(self, strong_document):
        extra = copy.deepcopy(strong_document["experience"][1])
        extra.update(company="Lumen", startDate="2014-01", endDate="2016-05")
        strong_document["experience"].append(extra)
        result = analyze(strong_document)
        assert result.score >= 85
        assert result.status is ResultStatus.EXCELLENT
        p1_labels = {c.label for c in result.checks_by_priority(1)}
        p1_failures = {c.label for c in result.checks if c.status is not CheckStatus.PASS} & p1_labels
        assert p1_failures == set()

    def test_relevance_filter(self, relevance_document):
        result = analyze(relevance_document)
        assert result.status is not ResultStatus.INVALID_CONTENT
        assert "Docker" in result.missing_keywords or "CI/CD" in result.missing_keywords
        assert "MongoDB" not in result.missing_keywords

    def test_placeholder(self, placeholder_document):
        result = analyze(placeholder_document)
        assert result.score == 0
        assert result.status is ResultStatus.INVALID_CONTENT
        assert any("placeholder" in line.lower() for line in result.feedback)
        assert result.missing_keywords == INVALID_CONTENT_KEYWORDS
        assert result.improvement_plan[0].impact is Impact.HIGH

    def test_placeholder_in_otherwise_strong_document(self, strong_document):
        strong_document["experience"][0]["description"] += "<p>Lorem ipsum</p>"
        assert analyze(strong_document).status is ResultStatus.INVALID_CONTENT

    def test_current_role_without_end_date(self, strong_document):
        latest = strong_document["experience"][0]
        latest["current"] = True
        latest.pop("endDate", None)
        result = analyze(strong_document)
        assert result.get_check("dates").status is not CheckStatus.FAIL


class TestInvalidContent:
    def test_short_content(self):
        result = analyze({"summary": "Engineer with 5 years of experience."})
        assert result.score == 0
        assert result.status is ResultStatus.INVALID_CONTENT
        assert "Insufficient content" in result.feedback[0]
        assert len(result.checks) == len(DEFAULT_RUBRIC)

    def test_minimum_is_configurable(self):
        analyzer = Analyzer(min_content_length=10)
        result = analyzer.analyze({"summary": "Engineer with 5 years of experience."})
        assert result.status is not ResultStatus.INVALID_CONTENT
        assert result.score > 0


class TestProperties:
    @pytest.mark.parametrize("data", [
        {},
        {"summary": None, "experience": None},
        {"profile": "broken", "skills": [1, 2, 3]},
        {"experience": [{"description": "<ul><li>Led 5 engineers</li></ul>" * 20}]},
    ])
    def test_score_in_range_and_total(self, data):
        result = analyze(data)
        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100

    def test_deterministic(self, strong_document):
        assert analyze(strong_document) == analyze(copy.deepcopy(strong_document))

    def test_weight_conservation(self, strong_document):
        result = analyze(strong_document)
        assert sum(c.weight for c in result.checks) == DEFAULT_RUBRIC.total_weight
        assert [c.id for c in result.checks] == DEFAULT_RUBRIC.ids

    def test_improving_a_section_does_not_lower_score(self, strong_document):
        weaker = copy.deepcopy(strong_document)
        weaker["certifications"] = []
        weaker["profile"]["headline"] = None
        assert analyze(strong_document).score >= analyze(weaker).score

    def test_plan_sorted_by_impact(self, relevance_document):
        order = {Impact.HIGH: 0, Impact.MEDIUM: 1, Impact.LOW: 2}
        plan = analyze(relevance_document).improvement_plan
        assert plan
        assert [order[a.impact] for a in plan] == sorted(order[a.impact] for a in plan)

    def test_keyword_limit(self, relevance_document):
        assert len(Analyzer(keyword_limit=2).analyze(relevance_document).missing_keywords) == 2


class TestFromConfig:
    def test_defaults(self):
        analyzer = Analyzer.from_config(AppConfig())
        assert analyzer.keyword_limit == 6
        assert analyzer.min_content_length == 200

    def test_graph_override(self, tmp_path, relevance_document):
        graph_file = tmp_path / "graph.yaml"
        graph_file.write_text("graph:\n  terraform: [aws]\ngeneric: []\n")
        config = AppConfig(analyzer=AnalyzerConfig(graph_path=str(graph_file)))
        analyzer = Analyzer.from_config(config)
        assert isinstance(analyzer.graph, KeywordGraph)
        assert analyzer.analyze(relevance_document).missing_keywords == ["Terraform"]
