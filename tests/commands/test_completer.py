"""Tests for the prompt_toolkit completer adapter."""

import pytest
from conftest import make_command
from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from wren.commands import CommandContext, CommandRegistry
from wren.commands.completer import SlashCommandCompleter


def complete(completer, text):
    return list(completer.get_completions(Document(text), CompleteEvent()))


async def complete_async(completer, text):
    return [c async for c in completer.get_completions_async(Document(text), CompleteEvent())]


@pytest.fixture
def completer(registry):
    return SlashCommandCompleter(registry, CommandContext(notebook_id="Inbox"))


class TestCommandNames:
    def test_names_with_descriptions(self, completer):
        completions = complete(completer, "/ta")

        assert [c.text for c in completions] == ["/todo ", "/tag "]
        assert all(c.start_position == -3 for c in completions)
        assert completions[1].display_meta_text == "Add tags to your note"

    def test_plain_text_has_no_completions(self, completer):
        assert complete(completer, "groceries") == []

    def test_doubled_marker_has_no_completions(self, completer):
        assert complete(completer, "//ta") == []

    def test_limit(self, registry):
        completer = SlashCommandCompleter(registry, max_command_suggestions=3)
        assert len(complete(completer, "/")) == 3


class TestArguments:
    def test_sync_provider(self, completer):
        completions = complete(completer, "/template we")

        assert [c.text for c in completions] == ["weekly-review "]
        assert completions[0].start_position == -2

    def test_no_completions_after_trailing_space(self, completer):
        assert complete(completer, "/template ") == []

    def test_unknown_command(self, completer):
        assert complete(completer, "/nope x") == []

    def test_sync_path_skips_async_providers(self, completer, vault):
        vault.create_note(None, "Inbox", "#work")
        assert complete(completer, "/tag w") == []

    @pytest.mark.asyncio
    async def test_async_path_awaits_providers(self, completer, vault):
        vault.create_note(None, "Inbox", "#work #weekend")

        completions = await complete_async(completer, "/tag we")

        assert [c.text for c in completions] == ["weekend "]
        assert completions[0].start_position == -2

    @pytest.mark.asyncio
    async def test_accepting_argument_appends_space(self, completer, vault):
        vault.create_note(None, "Inbox", "#work")
        text = "/tag wo"

        [completion] = await complete_async(completer, text)
        accepted = text[: len(text) + completion.start_position] + completion.text

        assert accepted == "/tag work "
        assert completion.display_text == "work"

    @pytest.mark.asyncio
    async def test_async_path_names(self, completer):
        completions = await complete_async(completer, "/pi")
        assert [c.text for c in completions] == ["/ping "]

    @pytest.mark.asyncio
    async def test_provider_errors_yield_nothing(self):
        async def broken(args, ctx):
            raise RuntimeError("offline")

        completer = SlashCommandCompleter(CommandRegistry([make_command("c", autocomplete=broken)]))
        assert await complete_async(completer, "/c x") == []

    def test_context_callable(self, registry):
        seen = []
        registry.register(make_command("probe", autocomplete=lambda a, ctx: seen.append(ctx) or []))
        context = CommandContext(notebook_id="Work")

        complete(SlashCommandCompleter(registry, lambda: context), "/probe x")

        assert seen == [context]
