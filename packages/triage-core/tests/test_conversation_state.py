"""Tests for ConversationState."""

from triage_core.conversation import ConversationState, Message, Phase, Role


class TestFormatForPrompt:
    """Tests for prompt rendering of the state."""

    def test_empty_state_renders_phase_and_header_only(self):
        """An empty log renders the phase line and the messages header."""
        state = ConversationState()

        assert state.format_for_prompt() == "Current phase: initial\nRecent messages:"

    def test_category_line_only_when_set(self):
        """Category appears after the phase once set."""
        state = ConversationState()
        assert "Current category" not in state.format_for_prompt()

        state.set_category("networking")
        lines = state.format_for_prompt().split("\n")

        assert lines[:3] == [
            "Current phase: initial",
            "Current category: networking",
            "Recent messages:",
        ]

    def test_only_last_five_messages_in_order(self):
        """Longer logs render exactly the last five, oldest first."""
        state = ConversationState()
        for i in range(8):
            if i % 2 == 0:
                state.add_user_message(f"message {i}")
            else:
                state.add_agent_message(f"message {i}")

        lines = state.format_for_prompt().split("\n")
        message_lines = lines[lines.index("Recent messages:") + 1 :]

        assert message_lines == [
            "agent: message 3",
            "user: message 4",
            "agent: message 5",
            "user: message 6",
            "agent: message 7",
        ]

    def test_fewer_than_five_messages_all_rendered(self):
        """Short logs are rendered in full."""
        state = ConversationState()
        state.add_user_message("hello")
        state.add_agent_message("hi")

        assert state.format_for_prompt().endswith("Recent messages:\nuser: hello\nagent: hi")

    def test_phase_reflects_updates(self):
        """Phase line follows set_phase."""
        state = ConversationState()
        state.set_phase(Phase.MITIGATION)

        assert state.format_for_prompt().startswith("Current phase: mitigation")

    def test_rendering_has_no_side_effects(self):
        """Rendering does not change the log."""
        state = ConversationState()
        state.add_user_message("hello")

        state.format_for_prompt()
        state.format_for_prompt()

        assert len(state.messages) == 1


class TestResults:
    """Tests for diagnosis and mitigation result accessors."""

    def test_unset_results_are_empty_strings(self):
        """Reading before any result was recorded yields ''."""
        state = ConversationState()

        assert state.get_diagnosis_result() == ""
        assert state.get_mitigation_result() == ""

    def test_later_diagnosis_overwrites(self):
        """A later diagnosis attempt replaces the earlier one."""
        state = ConversationState()
        state.set_diagnosis_result("DNS misconfigured")
        state.set_diagnosis_result("Firewall blocking port 1433")

        assert state.get_diagnosis_result() == "Firewall blocking port 1433"

    def test_mitigation_result_recorded(self):
        """Mitigation summary is readable after it is set."""
        state = ConversationState()
        state.set_mitigation_result("Opened port 1433")

        assert state.get_mitigation_result() == "Opened port 1433"


class TestMessages:
    """Tests for the message log."""

    def test_messages_are_appended_in_order(self):
        """Messages keep timeline order and roles."""
        state = ConversationState()
        state.add_user_message("my app is down")
        state.add_agent_message("which app?")

        assert state.messages == (
            Message(role=Role.USER, content="my app is down"),
            Message(role=Role.AGENT, content="which app?"),
        )

    def test_messages_snapshot_is_immutable(self):
        """The messages property returns a tuple copy."""
        state = ConversationState()
        state.add_user_message("one")
        snapshot = state.messages

        state.add_user_message("two")

        assert len(snapshot) == 1
        assert len(state.messages) == 2

    def test_set_phase_accepts_string_value(self):
        """set_phase coerces raw values to Phase."""
        state = ConversationState()
        state.set_phase("diagnosis")

        assert state.phase is Phase.DIAGNOSIS
