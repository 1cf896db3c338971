"""Tests for the command registry."""

import pytest
from conftest import make_command

from wren.commands.registry import CommandRegistry
from wren.commands.types import CommandCategory, CommandCollisionError


@pytest.fixture
def empty_registry():
    return CommandRegistry()


class TestRegistration:
    """Registering, replacing and removing commands."""

    def test_register_and_lookup(self, empty_registry):
        command = make_command("ping")
        empty_registry.register(command)

        assert empty_registry.get_command("ping") is command
        assert len(empty_registry) == 1

    def test_lookup_is_case_insensitive(self, empty_registry):
        empty_registry.register(make_command("Ping"))

        assert empty_registry.get_command("PING").name == "Ping"
        assert empty_registry.get_command("ping").name == "Ping"

    def test_lookup_tolerates_leading_marker(self, empty_registry):
        empty_registry.register(make_command("ping"))
        assert empty_registry.get_command("/ping") is not None

    def test_lookup_strips_only_one_marker(self, empty_registry):
        empty_registry.register(make_command("tag"))

        assert empty_registry.get_command("//tag") is None
        assert empty_registry.get_command("///tag") is None

    def test_lookup_uses_given_marker(self, empty_registry):
        empty_registry.register(make_command("tag"))

        assert empty_registry.get_command("!tag", marker="!") is not None
        assert empty_registry.get_command("/tag", marker="!") is None

    def test_alias_resolves_to_command(self, empty_registry):
        command = make_command("tag", aliases=["t"])
        empty_registry.register(command)

        assert empty_registry.get_command("T") is command
        assert "t" in empty_registry

    def test_unknown_name_returns_none(self, empty_registry):
        assert empty_registry.get_command("missing") is None
        assert empty_registry.get_command("") is None

    def test_duplicate_name_raises(self, empty_registry):
        empty_registry.register(make_command("ping"))

        with pytest.raises(CommandCollisionError) as exc_info:
            empty_registry.register(make_command("PING"))
        assert exc_info.value.claimed_by == "ping"

    def test_alias_colliding_with_name_raises(self, empty_registry):
        empty_registry.register(make_command("search"))

        with pytest.raises(CommandCollisionError):
            empty_registry.register(make_command("find", aliases=["search"]))

    def test_alias_colliding_with_alias_raises(self, empty_registry):
        empty_registry.register(make_command("search", aliases=["s"]))

        with pytest.raises(CommandCollisionError) as exc_info:
            empty_registry.register(make_command("sync", aliases=["s"]))
        assert exc_info.value.name == "s"
        assert empty_registry.get_command("sync") is None

    def test_name_colliding_with_existing_alias_raises(self, empty_registry):
        empty_registry.register(make_command("tag", aliases=["t"]))

        with pytest.raises(CommandCollisionError):
            empty_registry.register(make_command("t"))

    def test_collision_is_a_value_error(self, empty_registry):
        empty_registry.register(make_command("ping"))
        with pytest.raises(ValueError):
            empty_registry.register(make_command("ping"))

    def test_replace_overwrites_same_name(self, empty_registry):
        empty_registry.register(make_command("ping", aliases=["p"]))
        replacement = make_command("ping", aliases=["pong"])

        empty_registry.register(replacement, replace=True)

        assert empty_registry.get_command("ping") is replacement
        assert empty_registry.get_command("pong") is replacement
        assert empty_registry.get_command("p") is None
        assert len(empty_registry) == 1

    def test_replace_still_rejects_other_commands_aliases(self, empty_registry):
        empty_registry.register(make_command("ping"))
        empty_registry.register(make_command("tag", aliases=["t"]))

        with pytest.raises(CommandCollisionError):
            empty_registry.register(make_command("ping", aliases=["t"]), replace=True)

    def test_empty_name_rejected(self, empty_registry):
        with pytest.raises(ValueError, match="empty"):
            empty_registry.register(make_command("  "))

    def test_unregister(self, empty_registry):
        empty_registry.register(make_command("ping", aliases=["p"]))

        removed = empty_registry.unregister("PING")

        assert removed.name == "ping"
        assert empty_registry.get_command("p") is None
        assert empty_registry.unregister("ping") is None

    def test_failed_registration_leaves_registry_unchanged(self, empty_registry):
        empty_registry.register(make_command("tag", aliases=["t"]))
        before = list(empty_registry)

        with pytest.raises(CommandCollisionError):
            empty_registry.register(make_command("todo", aliases=["t"]))

        assert list(empty_registry) == before


class TestListing:
    """Listing, filtering and prefix matching."""

    def test_disabled_commands_are_hidden_but_resolvable(self, empty_registry):
        empty_registry.register(make_command("ping"))
        empty_registry.register(make_command("secret", enabled=False))

        assert [cmd.name for cmd in empty_registry.get_all_commands()] == ["ping"]
        assert empty_registry.get_command("secret") is not None

    def test_commands_by_category(self, empty_registry):
        empty_registry.register(make_command("todo", category=CommandCategory.NOTE))
        empty_registry.register(make_command("ping"))

        notes = empty_registry.get_commands_by_category(CommandCategory.NOTE)
        assert [cmd.name for cmd in notes] == ["todo"]

    def test_match_prefix_checks_aliases(self, empty_registry):
        empty_registry.register(make_command("timestamp", aliases=["now"]))
        empty_registry.register(make_command("todo"))

        assert [cmd.name for cmd in empty_registry.match_prefix("no")] == ["timestamp"]
        assert [cmd.name for cmd in empty_registry.match_prefix("T")] == ["timestamp", "todo"]

    def test_match_prefix_limit(self, empty_registry):
        for name in ["a1", "a2", "a3"]:
            empty_registry.register(make_command(name))

        assert len(empty_registry.match_prefix("a", limit=2)) == 2

    def test_empty_prefix_matches_everything(self, registry):
        assert len(registry.match_prefix("")) == len(registry.get_all_commands())


class TestUsage:
    """Usage templates generated from argument specs."""

    def test_default_usage_from_arguments(self):
        from wren.commands.types import CommandArgument

        command = make_command(
            "reminder",
            arguments=[
                CommandArgument("time", "when", required=True),
                CommandArgument("note", "what"),
            ],
        )

        assert command.usage == "/reminder <time> [note]"
        assert command.usage_placeholders() == ["<time>", "[note]"]

    def test_all_names_are_lower_cased(self):
        command = make_command("Tag", aliases=["T", "Label"])
        assert command.all_names() == ["tag", "t", "label"]
