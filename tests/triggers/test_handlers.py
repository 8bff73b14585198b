"""
Tests for the item assignment handlers.

A real NotificationDispatcher runs against the in-memory token store and a
recording push provider, so each test sees exactly which pushes went out.
"""

import asyncio

import pytest

from notifications.dispatcher import NotificationDispatcher
from notifications.push_provider import PushTransportError
from triggers.handlers import AssignmentNotifier


@pytest.fixture
def dispatcher(token_repository, push_provider):
    return NotificationDispatcher(token_repository, push_provider)


@pytest.fixture
def notifier(directory, dispatcher):
    return AssignmentNotifier(directory, dispatcher)


class TestItemCreated:
    """Tests for the item-created handler."""

    @pytest.mark.asyncio
    async def test_assignee_notified_once(self, notifier, push_provider):
        """Test one push to the assignee with the item coordinates."""
        result = await notifier.handle_item_created("ws-1", "item-1", {
            "title": "Release notes",
            "type": "bug",
            "createdBy": "user-a",
            "assigneeId": "user-b",
        })

        assert len(push_provider.sent) == 1
        message = push_provider.sent[0]
        assert message.title == "🐛 Sana iş atandı!"
        assert message.body == 'Ayşe sana "Release notes" atadı'
        assert message.data == {
            "type": "item_assigned",
            "workspaceId": "ws-1",
            "itemId": "item-1",
            "workspaceName": "Mobil Ekip",
        }
        assert result.user_id == "user-b"

    @pytest.mark.asyncio
    async def test_self_assignment_not_notified(self, notifier, push_provider, directory):
        """Test that creator == assignee sends nothing and reads nothing."""
        result = await notifier.handle_item_created("ws-1", "item-1", {
            "createdBy": "user-b",
            "assigneeId": "user-b",
        })

        assert result is None
        assert push_provider.sent == []
        assert directory.user_lookups == []

    @pytest.mark.asyncio
    async def test_unassigned_not_notified(self, notifier, push_provider):
        """Test that an item without assignee sends nothing."""
        assert await notifier.handle_item_created("ws-1", "item-1", {"createdBy": "user-a"}) is None
        assert push_provider.sent == []

    @pytest.mark.asyncio
    async def test_missing_data_is_noop(self, notifier, push_provider):
        """Test that a created event without data is ignored."""
        assert await notifier.handle_item_created("ws-1", "item-1", None) is None
        assert push_provider.sent == []

    @pytest.mark.asyncio
    async def test_defaults_for_missing_fields(self, notifier, push_provider):
        """Test default title, type glyph and fallback names."""
        await notifier.handle_item_created("ws-9", "item-1", {
            "createdBy": "user-x",
            "assigneeId": "user-b",
        })

        message = push_provider.sent[0]
        assert message.title == "🎯 Sana iş atandı!"
        assert message.body == 'Bilinmeyen sana "Yeni görev" atadı'
        assert message.data["workspaceName"] == "Workspace"

    @pytest.mark.asyncio
    async def test_english_locale(self, directory, dispatcher, push_provider):
        """Test the English text end to end."""
        notifier = AssignmentNotifier(directory, dispatcher, locale="en")

        await notifier.handle_item_created("ws-1", "item-1", {
            "createdBy": "user-a",
            "assigneeId": "user-b",
            "type": "idea",
        })

        message = push_provider.sent[0]
        assert message.title == "💡 Task assigned to you!"
        assert message.body == 'Ayşe assigned you "New task"'

    @pytest.mark.asyncio
    async def test_redelivered_event_notifies_again(self, notifier, push_provider):
        """Test that there is no deduplication between deliveries."""
        data = {"createdBy": "user-a", "assigneeId": "user-b", "title": "X"}

        await notifier.handle_item_created("ws-1", "item-1", data)
        await notifier.handle_item_created("ws-1", "item-1", data)

        assert len(push_provider.sent) == 2
        assert push_provider.sent[0].body == push_provider.sent[1].body


class TestItemUpdated:
    """Tests for the item-updated handler."""

    @pytest.mark.asyncio
    async def test_reassignment_notifies_new_assignee(self, notifier, push_provider, directory):
        """Test A -> B by user-c: one push to B naming user-c."""
        result = await notifier.handle_item_updated(
            "ws-1", "item-7",
            {"createdBy": "user-a", "assigneeId": "user-a", "title": "Old"},
            {"createdBy": "user-a", "assigneeId": "user-b", "updatedBy": "user-c",
             "title": "Refactor", "type": "logic"},
        )

        assert len(push_provider.sent) == 1
        message = push_provider.sent[0]
        assert message.title == "⚙️ Sana iş atandı!"
        assert message.body == 'Can sana "Refactor" atadı'
        assert message.data["itemId"] == "item-7"
        assert message.data["workspaceId"] == "ws-1"
        assert result.user_id == "user-b"
        assert directory.user_lookups == ["user-c"]

    @pytest.mark.asyncio
    async def test_creator_is_acting_user_without_updated_by(self, notifier, push_provider, directory):
        """Test createdBy as name source when updatedBy is unset."""
        await notifier.handle_item_updated(
            "ws-1", "item-7",
            {"createdBy": "user-a", "assigneeId": "user-c"},
            {"createdBy": "user-a", "assigneeId": "user-b"},
        )

        assert directory.user_lookups == ["user-a"]
        assert push_provider.sent[0].body == 'Ayşe sana "Görev" atadı'

    @pytest.mark.asyncio
    async def test_unchanged_assignee_not_notified(self, notifier, push_provider):
        """Test that edits without reassignment send nothing."""
        result = await notifier.handle_item_updated(
            "ws-1", "item-7",
            {"createdBy": "user-a", "assigneeId": "user-b", "title": "A"},
            {"createdBy": "user-a", "assigneeId": "user-b", "title": "B", "updatedBy": "user-c"},
        )

        assert result is None
        assert push_provider.sent == []

    @pytest.mark.asyncio
    async def test_cleared_assignee_not_notified(self, notifier, push_provider):
        """Test that removing the assignee sends nothing."""
        result = await notifier.handle_item_updated(
            "ws-1", "item-7",
            {"createdBy": "user-a", "assigneeId": "user-b"},
            {"createdBy": "user-a", "assigneeId": None, "updatedBy": "user-c"},
        )

        assert result is None
        assert push_provider.sent == []

    @pytest.mark.asyncio
    async def test_self_reassignment_not_notified(self, notifier, push_provider):
        """Test that taking an item yourself sends nothing."""
        result = await notifier.handle_item_updated(
            "ws-1", "item-7",
            {"createdBy": "user-a", "assigneeId": "user-a"},
            {"createdBy": "user-a", "assigneeId": "user-b", "updatedBy": "user-b"},
        )

        assert result is None
        assert push_provider.sent == []

    @pytest.mark.asyncio
    async def test_missing_before_is_noop(self, notifier, push_provider):
        """Test that an update without before data is ignored."""
        result = await notifier.handle_item_updated(
            "ws-1", "item-7", None, {"createdBy": "user-a", "assigneeId": "user-b"},
        )

        assert result is None
        assert push_provider.sent == []

    @pytest.mark.asyncio
    async def test_empty_before_document_then_assigned(self, notifier, push_provider):
        """Test that an item saved without fields and then assigned is notified."""
        result = await notifier.handle_item_updated(
            "ws-1", "item-7",
            {},
            {"createdBy": "user-a", "assigneeId": "user-b"},
        )

        assert len(push_provider.sent) == 1
        assert result.user_id == "user-b"
        assert push_provider.sent[0].body == 'Ayşe sana "Görev" atadı'


class TestFailureContainment:
    """Tests that delivery problems never fail the trigger."""

    @pytest.mark.asyncio
    async def test_backend_outage_does_not_raise(self, directory, token_repository, make_push_provider):
        """Test that a failing backend still completes the handler."""
        provider = make_push_provider(error=PushTransportError("unavailable"))
        notifier = AssignmentNotifier(directory, NotificationDispatcher(token_repository, provider))

        result = await notifier.handle_item_created("ws-1", "item-1", {
            "createdBy": "user-a",
            "assigneeId": "user-b",
        })

        assert result.transport_error is not None

    @pytest.mark.asyncio
    async def test_assignee_without_devices(self, directory, make_token_repository, push_provider):
        """Test that an assignee without tokens gets no send."""
        notifier = AssignmentNotifier(
            directory,
            NotificationDispatcher(make_token_repository({}), push_provider),
        )

        result = await notifier.handle_item_created("ws-1", "item-1", {
            "createdBy": "user-a",
            "assigneeId": "user-b",
        })

        assert result.skipped
        assert push_provider.sent == []


class TestConcurrentLookups:
    """Tests that the two directory reads overlap."""

    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self, token_repository, push_provider):
        """Test that the workspace read starts before the user read finishes."""
        events = []

        class SlowDirectory:
            async def resolve_user_name(self, user_id):
                events.append("user-start")
                await asyncio.sleep(0.01)
                events.append("user-end")
                return "Ayşe"

            async def resolve_workspace_name(self, workspace_id):
                events.append("workspace-start")
                await asyncio.sleep(0)
                events.append("workspace-end")
                return "Mobil Ekip"

        notifier = AssignmentNotifier(SlowDirectory(), NotificationDispatcher(token_repository, push_provider))

        await notifier.handle_item_created("ws-1", "item-1", {
            "createdBy": "user-a",
            "assigneeId": "user-b",
        })

        assert events.index("workspace-start") < events.index("user-end")
