"""Tests for conversations.py: export loading, recency sampling, flattening."""

import copy
import json
import math

import pytest

from userdna.conversations import (
    load_conversations,
    select_recent,
    flatten_messages,
    user_turns,
)
from userdna.analyzer import analyze
from conftest import make_conversation, make_node


# ── load_conversations() ──────────────────────────────────────

def test_load_bare_array(export_file, sample_conversations):
    conversations = load_conversations(export_file)
    assert len(conversations) == len(sample_conversations)
    assert conversations[0]["id"] == "c2"


def test_load_object_with_conversations_field(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"conversations": [make_conversation("a", ["hi"])]}))

    conversations = load_conversations(path)

    assert [c["id"] for c in conversations] == ["a"]


def test_load_object_without_conversations_field_fails(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"items": []}))

    with pytest.raises(ValueError, match="conversations"):
        load_conversations(path)


def test_load_scalar_document_fails(tmp_path):
    path = tmp_path / "export.json"
    path.write_text("42")

    with pytest.raises(ValueError):
        load_conversations(path)


def test_load_invalid_json_surfaces_decode_error(tmp_path):
    path = tmp_path / "export.json"
    path.write_text("{not json")

    with pytest.raises(json.JSONDecodeError):
        load_conversations(path)


def test_load_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        load_conversations(tmp_path / "missing.json")


# ── select_recent() ───────────────────────────────────────────

@pytest.mark.parametrize("n", [1, 2, 4, 5, 6, 10, 11, 23])
def test_select_recent_size(n):
    conversations = [make_conversation(str(i), ["x"], update_time=i) for i in range(n)]

    selected = select_recent(conversations)

    assert len(selected) == max(1, math.ceil(n * 0.2))


def test_select_recent_orders_newest_first():
    conversations = [
        make_conversation("old", ["x"], update_time=10),
        make_conversation("new", ["x"], update_time=90),
        make_conversation("mid", ["x"], update_time=50),
        make_conversation("created", ["x"], create_time=70),
        make_conversation("none", ["x"]),
    ]

    selected = select_recent(conversations, fraction=1.0)

    assert [c["id"] for c in selected] == ["new", "created", "mid", "old", "none"]


def test_select_recent_update_time_wins_over_create_time():
    conversations = [
        make_conversation("a", ["x"], update_time=5, create_time=100),
        make_conversation("b", ["x"], update_time=50, create_time=1),
    ]

    assert select_recent(conversations)[0]["id"] == "b"


def test_select_recent_is_stable_for_ties():
    conversations = [make_conversation(str(i), ["x"], update_time=7) for i in range(5)]

    selected = select_recent(conversations, fraction=1.0)

    assert [c["id"] for c in selected] == ["0", "1", "2", "3", "4"]


def test_select_recent_does_not_mutate_input():
    conversations = [make_conversation(str(i), ["x"], update_time=i) for i in range(6)]
    before = copy.deepcopy(conversations)

    select_recent(conversations)

    assert conversations == before


def test_select_recent_tolerates_bad_timestamps():
    conversations = [
        make_conversation("bad", ["x"], update_time="yesterday"),
        make_conversation("good", ["x"], update_time=3),
    ]

    assert select_recent(conversations)[0]["id"] == "good"


def test_select_recent_empty():
    assert select_recent([]) == []


# ── flatten_messages() ────────────────────────────────────────

def test_flatten_emits_one_turn_per_qualifying_node(sample_conversations):
    newest = sample_conversations[1]

    turns = flatten_messages([newest])

    # two user turns + the system turn; the blank and message-less nodes drop
    assert len(turns) == 3
    assert [t["role"] for t in turns] == ["user", "user", "system"]
    assert turns[0]["conversation_id"] == "c1"
    assert turns[0]["conversation_title"] == "Walemania"
    assert turns[0]["timestamp"] == 0


def test_flatten_joins_parts_with_space_and_strips():
    conv = make_conversation("a", [])
    conv["mapping"]["n"] = {
        "message": {
            "author": {"role": "user"},
            "content": {"parts": ["  first", "second  "]},
            "create_time": 12.5,
        }
    }

    turns = flatten_messages([conv])

    assert turns[0]["text"] == "first second"
    assert turns[0]["timestamp"] == 12.5


def test_flatten_ignores_non_text_parts():
    conv = make_conversation("a", [])
    conv["mapping"]["n"] = {
        "message": {
            "author": {"role": "user"},
            "content": {"parts": [{"asset_pointer": "file-1"}, "caption"]},
        }
    }

    assert flatten_messages([conv])[0]["text"] == "caption"


@pytest.mark.parametrize("node", [
    {},
    {"message": None},
    {"message": {"author": {"role": "user"}}},
    {"message": {"author": {"role": "user"}, "content": {}}},
    {"message": {"author": {"role": "user"}, "content": {"parts": []}}},
    {"message": {"author": {"role": "user"}, "content": {"parts": ["", "  "]}}},
    {"message": {"content": {"parts": ["orphan text"]}}},
    {"message": {"author": {}, "content": {"parts": ["no role"]}}},
    {"message": {"author": {"role": "user"}, "content": {"parts": 5}}},
    {"message": {"author": {"role": "user"}, "content": {"parts": "hello"}}},
    "not a node",
])
def test_flatten_skips_malformed_nodes(node):
    conv = make_conversation("a", ["kept"])
    conv["mapping"]["bad"] = node

    turns = flatten_messages([conv])

    assert [t["text"] for t in turns] == ["kept"]


def test_flatten_skips_conversations_without_mapping():
    conversations = [
        {"id": "nomap", "title": "x"},
        {"id": "nullmap", "mapping": None},
        make_conversation("ok", ["hello"]),
    ]

    turns = flatten_messages(conversations)

    assert [t["conversation_id"] for t in turns] == ["ok"]


def test_flatten_groups_by_conversation_order():
    conversations = [
        make_conversation("b", ["b1", "b2"]),
        make_conversation("a", ["a1"]),
    ]

    turns = flatten_messages(conversations)

    assert [t["text"] for t in turns] == ["b1", "b2", "a1"]


def test_user_turns_filters_role():
    conv = make_conversation("a", ["question"])
    conv["mapping"]["reply"] = make_node("answer", role="assistant")

    turns = flatten_messages([conv])

    assert [t["text"] for t in user_turns(turns)] == ["question"]


def test_analyze_survives_non_list_parts():
    conv = make_conversation("a", ["hello there"], update_time=10)
    conv["mapping"]["scalar"] = {
        "message": {"author": {"role": "user"}, "content": {"parts": 5}}
    }

    result = analyze([conv], fraction=1.0)

    assert result["stats"]["total_messages"] == 1
