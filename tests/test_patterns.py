"""Tests for the pattern library and keyword graph tables."""

import pytest

from resume_ats.analysis.patterns import DEFAULT_PATTERNS, PatternLibrary
from resume_ats.analysis.relevance import DEFAULT_GRAPH, KeywordGraph, display_name


class TestPatternLibrary:
    def test_action_verbs_whole_words(self):
        verbs = DEFAULT_PATTERNS.match_action_verbs("led the team; developed apis; ledger cleanup")
        assert verbs == ["led", "developed"]

    def test_action_verbs_distinct(self):
        assert DEFAULT_PATTERNS.match_action_verbs("built x, built y, built z") == ["built"]

    def test_all_verbs_lowercase_unique(self):
        verbs = DEFAULT_PATTERNS.all_verbs
        assert len(verbs) == len(set(verbs))
        assert all(v == v.lower() for v in verbs)

    def test_weak_phrases(self):
        found = DEFAULT_PATTERNS.find_weak_phrases("Responsible for billing. Worked on the API.")
        assert found == ["responsible for", "worked on"]

    def test_metrics(self):
        text = "cut costs by 30%, saved $20k, 3x faster, served 500 users, reduced by 12"
        assert DEFAULT_PATTERNS.count_metrics(text) >= 5

    def test_no_metrics(self):
        assert DEFAULT_PATTERNS.count_metrics("wrote clean code") == 0

    def test_from_yaml_overrides_one_table(self, tmp_path):
        path = tmp_path / "patterns.yaml"
        path.write_text("weak_phrases:\n  - Handled\naction_verbs:\n  custom: [Orchestrated]\n")
        library = PatternLibrary.from_yaml(path)
        assert library.weak_phrases == ("handled",)
        assert library.all_verbs == ["orchestrated"]
        assert library.metric_patterns == DEFAULT_PATTERNS.metric_patterns

    def test_from_yaml_rejects_bad_regex(self, tmp_path):
        path = tmp_path / "patterns.yaml"
        path.write_text("metric_patterns:\n  - '(unclosed'\n")
        with pytest.raises(ValueError, match="Invalid metric pattern"):
            PatternLibrary.from_yaml(path)

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "patterns.yaml"
        path.write_text("- just a list\n")
        with pytest.raises(ValueError):
            PatternLibrary.from_yaml(path)


class TestKeywordGraph:
    def test_related_terms_case_insensitive(self):
        assert "kubernetes" in DEFAULT_GRAPH.related_terms(" Docker ")
        assert DEFAULT_GRAPH.related_terms("cobol") == ()

    def test_mongodb_needs_database_signal(self):
        assert "node" not in DEFAULT_GRAPH.related_terms("mongodb")

    def test_display_names(self):
        assert DEFAULT_GRAPH.display("ci/cd") == "CI/CD"
        assert display_name("cloud services") == "Cloud Services"
        assert display_name("gRPC") == "gRPC"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text(
            "graph:\n  Terraform: [AWS, infrastructure]\n"
            "display_names:\n  terraform: Terraform\n"
            "generic: [Agile]\n"
            "aliases:\n  Agile: [Scrum]\n"
        )
        graph = KeywordGraph.from_yaml(path)
        assert graph.related_terms("terraform") == ("aws", "infrastructure")
        assert graph.display("terraform") == "Terraform"
        assert graph.generic == ("Agile",)
        assert graph.aliases_for("agile") == ("scrum",)

    def test_from_yaml_rejects_bad_graph(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text("graph: [docker]\n")
        with pytest.raises(ValueError, match="graph"):
            KeywordGraph.from_yaml(path)
