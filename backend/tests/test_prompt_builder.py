"""
Tests for prompt rendering and the history window.
"""

from vitalvibe.agents.symptom_agent import ROLE_LABELS, SymptomTriageAgent
from vitalvibe.core.prompt_builder import build_prompt, recent_turns, render_history


def make_history(n):
    return [
        {"role": "user" if i % 2 else "assistant", "content": f"turn {i}"}
        for i in range(1, n + 1)
    ]


class TestRecentTurns:

    def test_keeps_last_k_in_order(self):
        turns = recent_turns(make_history(10), 8)
        assert [t["content"] for t in turns] == [f"turn {i}" for i in range(3, 11)]

    def test_shorter_history_is_kept_whole(self):
        assert len(recent_turns(make_history(3), 8)) == 3

    def test_zero_window(self):
        assert recent_turns(make_history(3), 0) == []


class TestRenderHistory:

    def test_empty_history_renders_nothing(self):
        assert render_history([], 8) == ""

    def test_role_labels(self):
        text = render_history(
            [{"role": "user", "content": "my head hurts"}, {"role": "assistant", "content": "since when?"}],
            8, ROLE_LABELS,
        )
        assert "Previous conversation context:" in text
        assert "Patient: my head hurts" in text
        assert "Doctor: since when?" in text


class TestBuildPrompt:

    def test_ten_turns_window_of_eight(self):
        prompt = build_prompt("{context}\nNow: {entry}", make_history(10), "new", k=8)
        assert "turn 1\n" not in prompt and "turn 2\n" not in prompt
        for i in range(3, 11):
            assert f"turn {i}" in prompt
        # Original order preserved
        assert prompt.index("turn 3") < prompt.index("turn 10")
        assert prompt.count(": turn") == 8

    def test_entry_is_never_truncated(self):
        entry = "x" * 10000
        prompt = build_prompt("{context}{entry}", make_history(20), entry, k=2)
        assert entry in prompt

    def test_braces_in_entry_are_literal(self):
        prompt = build_prompt("Says: {entry}", [], "{context} {not_a_field}")
        assert prompt == "Says: {context} {not_a_field}"

    def test_pure(self):
        history = make_history(5)
        first = build_prompt("{context}{entry}", history, "a", k=3)
        second = build_prompt("{context}{entry}", history, "a", k=3)
        assert first == second
        assert len(history) == 5


class TestTriagePrompt:

    def test_triage_prompt_contents(self):
        agent = SymptomTriageAgent(history_window=8)
        prompt = agent.build_prompt("I have a fever", make_history(10))
        assert prompt.startswith("You are Dr. Sarah")
        assert 'Patient says: "I have a fever"' in prompt
        assert "Doctor: turn 2\n" not in prompt
        assert "Doctor: turn 10" in prompt
        assert "Patient: turn 3" in prompt
