"""
Tests for filters and conditions.

Filters suppress text (a stop filter dominates every other outcome);
conditions decide acceptance with the first matching rule.
"""
import pytest

from content_fields.exceptions import ConfigurationError
from content_fields.models.condition import FieldCondition, accept_conditions
from content_fields.models.enums import ConditionAction, FilterResult, FilterScope
from content_fields.models.filter import FieldFilter, apply_filters


class TestFieldFilter:
    """Test filter construction."""

    def test_plain_string_is_expression(self):
        f = FieldFilter.from_dict("(?i)advert.*")
        assert f.expr == "(?i)advert.*"
        assert f.scope == FilterScope.ALL
        assert f.stop is False

    def test_detailed_mapping(self):
        f = FieldFilter.from_dict({"expr": "Related.*", "scope": "body", "stop": True})
        assert f.scope == FilterScope.BODY
        assert f.stop is True

    def test_expression_is_compiled_with_dotall(self):
        f = FieldFilter.from_dict("Share.*")
        assert f.matches("Share this\non Twitter")

    def test_matches_whole_string_only(self):
        f = FieldFilter.from_dict("Advert")
        assert not f.matches("Advertisement")
        assert f.matches("Advert")

    def test_invalid_expression(self):
        with pytest.raises(ConfigurationError):
            FieldFilter.from_dict("(unclosed")

    def test_nested_quantifier_rejected(self):
        with pytest.raises(ConfigurationError):
            FieldFilter.from_dict("(a+)+b")

    def test_overlong_expression_rejected(self):
        with pytest.raises(ConfigurationError):
            FieldFilter.from_dict("a" * 5000)

    def test_stop_must_be_boolean(self):
        with pytest.raises(ConfigurationError):
            FieldFilter.from_dict({"expr": "x", "stop": "yes"})

    def test_unknown_keys_ignored(self):
        f = FieldFilter.from_dict({"expr": "x", "comment": "legacy"})
        assert f.expr == "x"


class TestApplyFilters:
    """Test the STOP-dominates filter evaluation."""

    def test_no_filters(self):
        assert apply_filters([], "anything", FilterScope.TEXT) == FilterResult.NONE
        assert apply_filters(None, "anything", FilterScope.TEXT) == FilterResult.NONE

    def test_no_match(self):
        filters = [FieldFilter.from_dict("Advert.*"), FieldFilter.from_dict({"expr": "Promo.*", "stop": True})]
        assert apply_filters(filters, "A real headline", FilterScope.TEXT) == FilterResult.NONE

    def test_skip(self):
        filters = [FieldFilter.from_dict("(?i)advert.*")]
        assert apply_filters(filters, "Advertisement", FilterScope.TEXT) == FilterResult.SKIP

    def test_stop_is_not_downgraded_by_later_skip(self):
        filters = [
            FieldFilter.from_dict({"expr": "(?i)advert.*", "stop": True}),
            FieldFilter.from_dict("Advert.*"),
        ]
        assert apply_filters(filters, "Advertisement: Buy Now", FilterScope.TEXT) == FilterResult.STOP

    def test_later_stop_overrides_skip(self):
        filters = [
            FieldFilter.from_dict("Advert.*"),
            FieldFilter.from_dict({"expr": "(?i)advert.*", "stop": True}),
        ]
        assert apply_filters(filters, "Advertisement: Buy Now", FilterScope.TEXT) == FilterResult.STOP

    def test_scope_restricts_filter(self):
        filters = [FieldFilter.from_dict({"expr": "Related.*", "scope": "body"})]
        assert apply_filters(filters, "Related posts", FilterScope.TEXT) == FilterResult.NONE
        assert apply_filters(filters, "Related posts", FilterScope.BODY) == FilterResult.SKIP

    def test_all_scope_applies_everywhere(self):
        filters = [FieldFilter.from_dict("Related.*")]
        for scope in (FilterScope.TEXT, FilterScope.BODY, FilterScope.SUMMARY):
            assert apply_filters(filters, "Related posts", scope) == FilterResult.SKIP

    def test_empty_expression_is_inert(self):
        filters = [FieldFilter.from_dict({"stop": True})]
        assert apply_filters(filters, "", FilterScope.TEXT) == FilterResult.NONE


class TestConditions:
    """Test first-match-wins condition evaluation."""

    def test_plain_string_accepts(self):
        condition = FieldCondition.from_dict("(?i).*webinar.*")
        assert condition.action == ConditionAction.ACCEPT
        assert accept_conditions([condition], "Join our Webinar today")

    def test_no_match_rejects(self):
        conditions = [FieldCondition.from_dict("(?i).*webinar.*")]
        assert accept_conditions(conditions, "Quarterly results") is False

    def test_empty_conditions_reject(self):
        assert accept_conditions([], "anything") is False
        assert accept_conditions(None, "anything") is False

    def test_first_match_wins(self):
        conditions = [
            FieldCondition.from_dict({"expr": "(?i).*sponsored.*", "action": "reject"}),
            FieldCondition.from_dict(".*"),
        ]
        assert accept_conditions(conditions, "Sponsored: a partner post") is False
        assert accept_conditions(conditions, "An editorial post") is True

    def test_conditions_without_expression_are_skipped(self):
        conditions = [FieldCondition.from_dict({"action": "reject"}), FieldCondition.from_dict(".*")]
        assert accept_conditions(conditions, "text") is True

    def test_invalid_action(self):
        with pytest.raises(ConfigurationError):
            FieldCondition.from_dict({"expr": ".*", "action": "maybe"})
