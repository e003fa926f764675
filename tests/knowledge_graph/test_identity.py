"""Tests for identity resolution."""

from marginalia.knowledge_graph import IdentityResolver, RawNode


class TestIdentityResolver:
    """Test the identity trust order."""

    def test_explicit_id_wins(self):
        node = RawNode({"id": "alice", "human_readable_id": 7}, ref="4:abc:1")

        assert IdentityResolver().resolve(node) == "alice"

    def test_human_readable_id_when_id_missing(self):
        node = RawNode({"human_readable_id": 7}, ref="4:abc:1")

        assert IdentityResolver().resolve(node) == "7"

    def test_empty_id_falls_through(self):
        node = RawNode({"id": "", "human_readable_id": "rabbit"}, ref=3)

        assert IdentityResolver().resolve(node) == "rabbit"

    def test_zero_human_readable_id_is_present(self):
        node = RawNode({"human_readable_id": 0}, ref=3)

        assert IdentityResolver().resolve(node) == "0"

    def test_fallback_uses_internal_ref(self):
        assert IdentityResolver().resolve(RawNode({}, ref=42)) == "Node_42"

    def test_fallback_without_ref_still_resolves(self):
        assert IdentityResolver().resolve(RawNode()) == "Node_None"

    def test_custom_extractors_run_before_fallback(self):
        resolver = IdentityResolver([lambda node: node.properties.get("title")])

        assert resolver.resolve(RawNode({"title": "Hatter"})) == "Hatter"
        assert resolver.resolve(RawNode({"id": "ignored"}, ref=1)) == "Node_1"

    def test_whitespace_only_id_falls_through(self):
        node = RawNode({"id": "   ", "human_readable_id": "rabbit"}, ref=3)

        assert IdentityResolver().resolve(node) == "rabbit"

    def test_identity_is_not_trimmed(self):
        assert IdentityResolver().resolve(RawNode({"id": " A"})) == " A"
