"""Tests for the mention data model."""

import uuid

from mention_menu.models import (
    AccessGrant,
    DocumentEntity,
    IconKind,
    IconRef,
    MentionCandidate,
    MentionKind,
    Query,
    SuggestionListState,
    UserEntity,
)


class TestEntities:
    """Tests for parsing API entities."""

    def test_user_from_api(self):
        user = UserEntity.from_api(
            {"id": "u1", "name": "Alice", "avatarUrl": "https://a/x.png", "color": "#f00"}
        )

        assert user == UserEntity("u1", "Alice", "https://a/x.png", "#f00")

    def test_document_from_api_without_icon(self):
        doc = DocumentEntity.from_api({"id": "d1", "title": "Notes", "icon": None})

        assert doc.icon is None
        assert doc.title == "Notes"

    def test_access_grant_from_api(self):
        assert AccessGrant.from_api({"id": 7}).user_id == "7"


class TestMentionCandidate:
    """Tests for MentionCandidate."""

    def test_to_attrs(self):
        mention_id = uuid.uuid4()
        candidate = MentionCandidate(
            mention_id=mention_id,
            kind=MentionKind.USER,
            entity_id="u1",
            label="Alice",
            icon=IconRef(kind=IconKind.AVATAR),
            actor_id="u0",
        )

        assert candidate.to_attrs() == {
            "id": str(mention_id),
            "type": "user",
            "modelId": "u1",
            "label": "Alice",
            "actorId": "u0",
        }

    def test_to_attrs_without_actor(self):
        candidate = MentionCandidate(
            mention_id=uuid.uuid4(),
            kind=MentionKind.DOCUMENT,
            entity_id="d1",
            label="Notes",
            icon=IconRef(kind=IconKind.DOCUMENT),
        )

        assert "actorId" not in candidate.to_attrs()
        assert candidate.append_space is True


class TestDefaults:
    def test_query_defaults_inactive(self):
        assert Query() == Query(search_term="", active=False)

    def test_state_defaults_unloaded(self):
        state = SuggestionListState()

        assert state.loaded is False
        assert state.candidates == ()
        assert state.generation == 0
