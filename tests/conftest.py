"""Shared pytest fixtures for userdna tests."""

import json
import logging

import pytest


def make_node(text, role="user", create_time=None):
    """Build one export mapping node with a single text part."""
    return {
        "message": {
            "author": {"role": role},
            "content": {"content_type": "text", "parts": [text]},
            "create_time": create_time,
        }
    }


def make_conversation(conv_id, texts, update_time=None, create_time=None,
                      title=None, role="user"):
    """Build a conversation whose mapping holds one node per text."""
    return {
        "id": conv_id,
        "title": title or f"Conversation {conv_id}",
        "create_time": create_time,
        "update_time": update_time,
        "mapping": {
            f"{conv_id}-n{i}": make_node(text, role=role, create_time=i)
            for i, text in enumerate(texts)
        },
    }


def make_turn(text, role="user"):
    return {
        "role": role,
        "text": text,
        "timestamp": None,
        "conversation_id": "c1",
        "conversation_title": "Test",
    }


@pytest.fixture(autouse=True)
def reset_userdna_logger():
    """Drop handlers the CLI installs so each test starts clean."""
    yield
    logger = logging.getLogger("userdna")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def sample_conversations():
    """A small export with mixed roles, projects, rules and triggers.

    Contains:
    - "Walemania" (newest): user turns naming WALEMANIA and a core rule
    - "Wilde West": user turns with emojis, hashtags and casual tone
    - "Old stuff" (oldest): a Java question, outside the recent sample
      when sampling 20% of five
    - a system node, an empty node and a node without a message
    """
    newest = make_conversation("c1", [
        "Hey, working on WALEMANIA again. Use Python with Flask and keep it concise!",
        "Core rule: always answer in bullet points, no fluff.",
    ], update_time=500, title="Walemania")
    newest["mapping"]["c1-sys"] = make_node("You are ChatGPT.", role="system")
    newest["mapping"]["c1-empty"] = make_node("   ")
    newest["mapping"]["c1-root"] = {"message": None, "parent": None}

    return [
        make_conversation("c2", ["🚀 Ship WILDE WEST today #urgent lol"],
                          update_time=400, title="Wilde West"),
        newest,
        make_conversation("c3", ["Spring and Maven setup for java"],
                          update_time=100, title="Old stuff"),
        make_conversation("c4", ["yo dude"], create_time=300),
        make_conversation("c5", ["sup"], update_time=200),
    ]


@pytest.fixture
def export_file(tmp_path, sample_conversations):
    """Write sample_conversations as a bare JSON array export."""
    path = tmp_path / "conversations.json"
    path.write_text(json.dumps(sample_conversations, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path):
    """A config that keeps logs and output inside tmp_path."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "log_dir": str(tmp_path / "logs"),
        "output_dir": str(tmp_path / "out"),
    }))
    return path
