"""Tests for allowlist / denylist handling."""

import pytest
from structlog.testing import capture_logs

from secretguard.config.schema import SecretGuardConfig
from secretguard.errors import PatternError
from secretguard.findings.models import Finding
from secretguard.scanner.filters import (
    GlobRule,
    RegexRule,
    SecretFilters,
    StringRule,
    compile_allowlist_rule,
    create_filters_from_config,
    validate_allowlist,
    validate_denylist,
)

from conftest import AWS_KEY


def _finding(match, file="src/app.py"):
    return Finding(
        type="aws-access-key", match=match, file=file,
        line_start=1, line_end=1, start_column=1, end_column=len(match),
    )


class TestRuleTyping:
    def test_plain_string(self):
        rule = compile_allowlist_rule("EXAMPLE")
        assert isinstance(rule, StringRule)
        assert rule.matches("akiaiosfodnn7example")

    def test_delimited_regex(self):
        rule = compile_allowlist_rule("/^sk_test_/")
        assert isinstance(rule, RegexRule)
        assert rule.matches("SK_TEST_abc")
        assert not rule.matches("sk_live_abc")

    def test_glob(self):
        rule = compile_allowlist_rule("*.example.com")
        assert isinstance(rule, GlobRule)
        assert rule.matches("API.Example.com")
        assert not rule.matches("example.org")

    def test_question_mark_is_glob(self):
        assert isinstance(compile_allowlist_rule("key-?"), GlobRule)

    def test_structured_rule(self):
        rule = compile_allowlist_rule({"type": "regex", "pattern": "^ghp_0+$", "reason": "fixture"})
        assert isinstance(rule, RegexRule)
        assert rule.reason == "fixture"

    def test_leading_slash_path_is_literal(self):
        rule = compile_allowlist_rule("/api/v1/keys")
        assert isinstance(rule, StringRule)
        assert rule.matches("https://svc.local/API/v1/keys?id=1")

    def test_trailing_letters_are_not_flags(self):
        rule = compile_allowlist_rule("/lab/ms")
        assert isinstance(rule, StringRule)
        filters = SecretFilters(allowlist=["/lab/ms"])
        assert not filters.is_allowlisted("sk_live_LAB" + "x9Qm2Rt7Vb4N" * 2)
        assert filters.is_allowlisted("see /lab/ms for details")

    def test_structured_regex_takes_flags(self):
        rule = compile_allowlist_rule({"type": "regex", "pattern": "/^sk_test_[a-z]+$/m"})
        assert isinstance(rule, RegexRule)
        assert rule.matches("line one\nsk_test_abc\nline three")

    @pytest.mark.parametrize("entry", [
        "",
        42,
        {"type": "bogus", "pattern": "x"},
        {"type": "string"},
        "/(unclosed/",
    ])
    def test_unusable_entries(self, entry):
        with pytest.raises(ValueError):
            compile_allowlist_rule(entry)


class TestSecretFilters:
    def test_string_rule_suppresses(self):
        filters = SecretFilters(allowlist=[AWS_KEY])
        assert filters.is_allowlisted(AWS_KEY)
        assert not filters.is_allowlisted("AKIAZ7QK3LM9PX2RTV4B")

    def test_glob_matches_paths(self):
        filters = SecretFilters(allowlist=["tests/fixtures/**"])
        assert filters.is_allowlisted("anything", "tests/fixtures/keys.txt")
        assert filters.is_allowlisted("anything", "Tests\\Fixtures\\keys.txt")
        assert not filters.is_allowlisted("anything", "src/keys.txt")

    def test_string_rule_never_matches_paths(self):
        filters = SecretFilters(allowlist=["fixtures"])
        assert not filters.is_allowlisted("AKIAZ7QK3LM9PX2RTV4B", "fixtures/keys.txt")

    def test_filter_findings_partitions(self):
        filters = SecretFilters(allowlist=[AWS_KEY])
        keep = _finding("AKIAZ7QK3LM9PX2RTV4B")
        drop = _finding(AWS_KEY)
        result = filters.filter_findings([keep, drop])
        assert result.filtered == [keep]
        assert len(result.suppressed) == 1
        assert result.suppressed[0].suppressed_reason == "allowlist"

    def test_filtering_is_idempotent(self):
        filters = SecretFilters(allowlist=[AWS_KEY, "/^sk_test_/", "*.example.com", "fixtures/**"])
        findings = [
            _finding(AWS_KEY),
            _finding("sk_test_" + "a1B2c3D4e5" * 3),
            _finding("api.example.com"),
            _finding("AKIAZ7QK3LM9PX2RTV4B", file="fixtures/keys.txt"),
            _finding("AKIAZ7QK3LM9PX2RTV4B"),
            _finding("ghp_" + "aB3dE5fG7h" * 3 + "J9kL1m"),
        ]
        first = filters.filter_findings(findings)
        assert len(first.suppressed) == 4
        second = filters.filter_findings(first.filtered)
        assert second.filtered == first.filtered
        assert second.suppressed == []
        assert filters.filter_findings(first.suppressed).filtered == []

    def test_bad_rule_skipped_with_warning(self):
        with capture_logs() as logs:
            filters = SecretFilters(allowlist=["/(unclosed/", AWS_KEY])
        assert len(filters.allowlist) == 1
        skipped = [e for e in logs if e["event"] == "allowlist rule skipped"]
        assert skipped and skipped[0]["index"] == 0
        assert skipped[0]["log_level"] == "warning"

    def test_bad_denylist_raises(self):
        with pytest.raises(PatternError):
            SecretFilters(denylist=[{"name": "bad", "pattern": "(unclosed"}])

    def test_duplicate_denylist_raises(self):
        spec = {"name": "dup", "pattern": "dup_[0-9]+"}
        with pytest.raises(PatternError, match="Duplicate"):
            SecretFilters(denylist=[spec, dict(spec)])

    def test_get_stats(self):
        filters = SecretFilters(
            allowlist=["EXAMPLE", "/^sk_test_/", "*.example.com", "tests/**"],
            denylist=[{"name": "corp", "pattern": "corp_[0-9]+"}],
        )
        assert filters.get_stats() == {
            "allowlist_rules": 4,
            "denylist_patterns": 1,
            "rule_types": {"string": 1, "regex": 1, "glob": 2},
        }


class TestValidation:
    def test_valid_allowlist(self):
        result = validate_allowlist(["EXAMPLE", "/^x/", "*.test"])
        assert result.valid
        assert result.errors == []

    def test_invalid_allowlist_entries_reported(self):
        result = validate_allowlist(["ok", "/(bad/", ""])
        assert not result.valid
        assert len(result.errors) == 2
        assert result.errors[0].startswith("allowlist[1]:")
        assert result.errors[1].startswith("allowlist[2]:")

    def test_invalid_denylist_entries_reported(self):
        result = validate_denylist([
            {"name": "good", "pattern": "good_[0-9]+"},
            {"pattern": "nameless"},
            {"name": "good", "pattern": "again"},
        ])
        assert not result.valid
        assert result.errors[0].startswith("denylist[1]:")
        assert "Duplicate" in result.errors[1]

    def test_empty_lists_are_valid(self):
        assert validate_allowlist(None).valid
        assert validate_denylist([]).valid


class TestFactory:
    def test_from_mapping(self):
        filters = create_filters_from_config({"allowlist": [AWS_KEY]})
        assert filters.is_allowlisted(AWS_KEY)
        assert filters.denylist == []

    def test_from_config(self):
        cfg = SecretGuardConfig()
        cfg.allowlist.rules = ["*.example.com"]
        cfg.denylist = [{"name": "corp", "pattern": "corp_[0-9]+"}]
        filters = create_filters_from_config(cfg)
        assert filters.get_stats()["denylist_patterns"] == 1

    def test_from_none(self):
        assert create_filters_from_config(None).allowlist == []
