"""Unit tests for the dialog controller."""

from pathlib import Path

import pytest

from confirmdialog.config import DialogSettings
from confirmdialog.controller import DEFAULT_LAYOUT_FILE, DEFAULT_TEMPLATE_FILE, DialogController
from confirmdialog.errors import InvalidArgumentError, InvalidStateError


class Recorder:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def __call__(self, params: dict) -> None:
        self.calls.append(params)


@pytest.fixture
def redraws() -> list[int]:
    return []


@pytest.fixture
def controller(redraws: list[int]) -> DialogController:
    return DialogController(redraw=lambda: redraws.append(1))


class TestDefineConfirmer:
    def test_defines_and_configures(self, controller: DialogController):
        """
        Given a fresh controller
        When a confirmer is defined
        Then it is registered and configured
        """
        result = controller.define_confirmer("logout", Recorder(), "Log out now?", "Confirm")
        assert result is controller
        assert controller.get_confirmer("logout").configured is True

    def test_invalid_name_is_invalid_argument(self, controller: DialogController):
        with pytest.raises(InvalidArgumentError):
            controller.define_confirmer("log-out", Recorder(), "Sure?", "Confirm")

    def test_second_definition_is_invalid_argument(self, controller: DialogController):
        """
        Given a defined confirmer
        When the same name is defined again
        Then InvalidArgumentError is raised and the first handler stays bound
        """
        first = Recorder()
        controller.define_confirmer("logout", first, "Sure?", "Confirm")
        with pytest.raises(InvalidArgumentError):
            controller.define_confirmer("logout", Recorder(), "Other?", "Other")
        assert controller.get_confirmer("logout").handler is first

    def test_non_callable_handler_is_invalid_argument(self, controller: DialogController):
        with pytest.raises(InvalidArgumentError):
            controller.define_confirmer("logout", "not callable", "Sure?", "Confirm")  # type: ignore[arg-type]
        assert "logout" not in controller.registry

    def test_defines_a_pre_registered_name(self, controller: DialogController):
        controller.registry.register("logout")
        controller.define_confirmer("logout", Recorder(), "Sure?", "Confirm")
        assert controller.get_confirmer("logout").configured is True

    def test_get_unknown_confirmer_is_invalid_argument(self, controller: DialogController):
        with pytest.raises(InvalidArgumentError):
            controller.get_confirmer("logout")

    @pytest.mark.parametrize("name", [["logout"], {"logout": 1}, None, 42])
    def test_non_string_name_is_invalid_argument(self, controller: DialogController, name):
        """
        Given a name that is not a string, including unhashable ones
        When a confirmer is defined under it
        Then InvalidArgumentError is raised and nothing is registered
        """
        with pytest.raises(InvalidArgumentError):
            controller.define_confirmer(name, Recorder(), "Sure?", "Confirm")
        assert len(controller.registry) == 0

    @pytest.mark.parametrize(
        "question, heading",
        [("Sure?", 5), (None, "Confirm"), ("Sure?", None), (["Sure?"], "Confirm")],
    )
    def test_text_must_be_string_or_callable(
        self, controller: DialogController, question, heading
    ):
        """
        Given a question or heading that is neither text nor a callback
        When the confirmer is defined
        Then InvalidArgumentError is raised and the name stays free
        """
        with pytest.raises(InvalidArgumentError):
            controller.define_confirmer("logout", Recorder(), question, heading)
        assert "logout" not in controller.registry

    def test_callable_text_is_accepted(self, controller: DialogController):
        controller.define_confirmer(
            "logout", Recorder(), lambda c, p: "Sure?", lambda c, p: "Confirm"
        )
        controller.activate("logout")
        assert controller.active is not None
        assert controller.active.heading == "Confirm"


class TestActivate:
    def test_activates_and_redraws(self, controller: DialogController, redraws: list[int]):
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("deleteItem", {"id": 42})
        assert controller.active is not None
        assert controller.active.name == "deleteItem"
        assert dict(controller.active.params) == {"id": 42}
        assert controller.is_showing is True
        assert redraws == [1]

    def test_non_string_name_is_invalid_argument(self, controller: DialogController):
        with pytest.raises(InvalidArgumentError):
            controller.activate(42, {})  # type: ignore[arg-type]

    def test_non_mapping_params_is_invalid_argument(self, controller: DialogController):
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        with pytest.raises(InvalidArgumentError):
            controller.activate("deleteItem", [1, 2])  # type: ignore[arg-type]

    def test_unconfigured_name_leaves_idle_state(self, controller: DialogController):
        """
        Given a registered but unconfigured confirmer and an idle controller
        When it is activated
        Then InvalidStateError is raised and nothing becomes active
        """
        controller.registry.register("deleteItem")
        with pytest.raises(InvalidStateError):
            controller.activate("deleteItem", {"id": 42})
        assert controller.active is None

    def test_unknown_name_keeps_previous_instance(self, controller: DialogController):
        """
        Given a controller showing one confirmer
        When an unknown confirmer is activated
        Then InvalidStateError is raised and the previous instance stays active
        """
        controller.define_confirmer("logout", Recorder(), "Log out?", "Confirm")
        controller.activate("logout", {})
        previous = controller.active

        with pytest.raises(InvalidStateError):
            controller.activate("deleteItem", {"id": 42})

        assert controller.active is previous

    def test_new_activation_replaces_previous(self, controller: DialogController):
        controller.define_confirmer("logout", Recorder(), "Log out?", "Confirm")
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("logout")
        controller.activate("deleteItem", {"id": 1})
        assert controller.active is not None
        assert controller.active.name == "deleteItem"

    def test_missing_factory_is_invalid_state(self):
        controller = DialogController(factory=None)
        controller.define_confirmer("logout", Recorder(), "Log out?", "Confirm")
        with pytest.raises(InvalidStateError):
            controller.activate("logout", {})

    def test_injected_factory_is_called_eagerly(self):
        """
        Given a controller built with a custom factory
        When a confirmer is activated
        Then the factory receives the definition, params and current ajax flag
        """
        from confirmdialog.confirmer import ConfirmerInstance

        seen = []

        def factory(definition, params=None, ajax_enabled=True):
            seen.append((definition.name, dict(params or {}), ajax_enabled))
            return ConfirmerInstance.activate(definition, params, ajax_enabled)

        controller = DialogController(factory=factory).disable_ajax()
        controller.define_confirmer("logout", Recorder(), "Log out?", "Confirm")
        controller.activate("logout", {"who": "me"})

        assert seen == [("logout", {"who": "me"}, False)]

    def test_failed_redraw_restores_previous_state(self):
        """
        Given a controller whose redraw fails on the second activation
        When that activation is attempted
        Then the error propagates and the earlier confirmer stays pending
        """
        calls = []

        def redraw():
            calls.append(1)
            if len(calls) == 2:
                raise InvalidStateError("Dialog control is without template")

        handler = Recorder()
        controller = DialogController(redraw=redraw)
        controller.define_confirmer("logout", handler, "Log out?", "Confirm")
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("logout")
        previous = controller.active

        with pytest.raises(InvalidStateError):
            controller.activate("deleteItem", {"id": 1})

        assert controller.active is previous
        controller.confirm()
        assert handler.calls == [{}]

    def test_failed_first_redraw_stays_idle(self):
        def redraw():
            raise InvalidStateError("Dialog control is without template")

        controller = DialogController(redraw=redraw)
        controller.define_confirmer("logout", Recorder(), "Log out?", "Confirm")

        with pytest.raises(InvalidStateError):
            controller.activate("logout")

        assert controller.active is None
        assert not controller.is_showing
        with pytest.raises(InvalidStateError):
            controller.confirm()


class TestDispatchSignal:
    def test_equivalent_to_activate(self, controller: DialogController):
        """
        Given a deleteItem confirmer
        When confirmDeleteItem is dispatched
        Then deleteItem becomes active with the same params
        """
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.dispatch_signal("confirmDeleteItem", {"id": 42})
        assert controller.active is not None
        assert controller.active.name == "deleteItem"
        assert dict(controller.active.params) == {"id": 42}

    def test_undecodable_signal_is_invalid_argument(self, controller: DialogController):
        with pytest.raises(InvalidArgumentError):
            controller.dispatch_signal("deleteItem", {})

    def test_undecodable_signal_is_logged_as_rejected(
        self, controller: DialogController, caplog: pytest.LogCaptureFixture
    ):
        with caplog.at_level("WARNING", logger="confirmdialog.controller"):
            with pytest.raises(InvalidArgumentError):
                controller.dispatch_signal("deleteItem", {})
        assert "Rejecting undecodable signal 'deleteItem'" in caplog.text

    def test_unknown_confirmer_is_invalid_argument(self, controller: DialogController):
        with pytest.raises(InvalidArgumentError):
            controller.dispatch_signal("confirmDeleteItem", {})
        assert controller.active is None

    def test_unconfigured_confirmer_is_invalid_argument(self, controller: DialogController):
        controller.registry.register("deleteItem")
        with pytest.raises(InvalidArgumentError):
            controller.dispatch_signal("confirmDeleteItem", {})

    def test_logout_scenario(self, controller: DialogController):
        """
        Given logout defined with a recording handler
        When confirmLogout is dispatched and then confirmed
        Then the question is shown and the handler runs once with {}
        """
        record_call = Recorder()
        controller.define_confirmer("logout", record_call, "Log out now?", "Confirm")

        controller.dispatch_signal("confirmLogout", {})
        assert controller.active is not None
        assert controller.active.question == "Log out now?"

        controller.active.confirm()
        assert record_call.calls == [{}]


class TestConfirmAndReset:
    def test_confirm_runs_handler_and_resets(
        self, controller: DialogController, redraws: list[int]
    ):
        handler = Recorder()
        controller.define_confirmer("deleteItem", handler, "Delete?", "Confirm")
        controller.activate("deleteItem", {"id": 42})

        controller.confirm()

        assert handler.calls == [{"id": 42}]
        assert controller.active is None
        assert redraws == [1, 1]

    def test_confirm_when_idle_is_invalid_state(self, controller: DialogController):
        with pytest.raises(InvalidStateError):
            controller.confirm()

    def test_handler_may_chain_another_confirmer(self, controller: DialogController):
        """
        Given a handler that activates a second confirmer
        When the first confirmer is confirmed
        Then the second confirmer stays pending
        """
        controller.define_confirmer("second", Recorder(), "Really?", "Second")
        controller.define_confirmer(
            "first", lambda params: controller.activate("second", params), "Sure?", "First"
        )
        controller.activate("first", {"id": 1})

        controller.confirm()

        assert controller.active is not None
        assert controller.active.name == "second"

    def test_reset_clears_active_and_renders_idle(self, controller: DialogController):
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("deleteItem", {"id": 42})

        assert controller.reset() is controller

        assert controller.active is None
        assert controller.render_state() is None
        assert controller.render() == ""


class TestAjaxMode:
    def test_default_is_ajax(self, controller: DialogController):
        assert controller.ajax is True

    def test_toggle_affects_only_later_activations(self, controller: DialogController):
        """
        Given an instance activated in ajax mode
        When ajax is disabled and another confirmer is activated
        Then the first instance keeps ajax and the new one does not
        """
        controller.define_confirmer("a", Recorder(), "A?", "A")
        controller.define_confirmer("b", Recorder(), "B?", "B")
        controller.activate("a")
        first = controller.active

        controller.disable_ajax()
        assert first is not None and first.ajax_enabled is True

        controller.activate("b")
        assert controller.active is not None and controller.active.ajax_enabled is False

        controller.enable_ajax()
        assert controller.active.ajax_enabled is False

    def test_from_settings(self):
        controller = DialogController.from_settings(DialogSettings(ajax=False))
        assert controller.ajax is False


class TestRender:
    def test_default_template_files(self, controller: DialogController):
        assert controller.get_layout_file() == DEFAULT_LAYOUT_FILE
        assert controller.get_template_file() == DEFAULT_TEMPLATE_FILE
        assert DEFAULT_LAYOUT_FILE.is_file()
        assert DEFAULT_TEMPLATE_FILE.is_file()

    def test_renders_heading_and_question(self, controller: DialogController):
        controller.define_confirmer("deleteItem", Recorder(), "Delete it?", "Careful")
        controller.activate("deleteItem", {"id": 42})
        output = controller.render()
        assert "Careful" in output
        assert "Delete it?" in output

    def test_custom_templates(self, controller: DialogController, tmp_path: Path):
        layout = tmp_path / "layout.txt"
        layout.write_text("<{name}>{content}</{name}>")
        template = tmp_path / "confirmer.txt"
        template.write_text("{heading}|{question}|{params[id]}")

        controller.set_layout_file(layout).set_template_file(str(template))
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("deleteItem", {"id": 42})

        assert controller.render() == "<deleteItem>Confirm|Delete?|42</deleteItem>"
        assert controller.get_template_file() == template

    def test_markup_in_text_is_escaped(self, controller: DialogController, tmp_path: Path):
        layout = tmp_path / "layout.txt"
        layout.write_text("{content}")
        template = tmp_path / "confirmer.txt"
        template.write_text("{question}")
        controller.set_layout_file(layout).set_template_file(template)
        controller.define_confirmer("deleteItem", Recorder(), "Delete [b]x[/b]?", "Confirm")
        controller.activate("deleteItem")

        assert controller.render() == "Delete \\[b]x\\[/b]?"

    def test_markup_in_params_is_escaped(self, controller: DialogController, tmp_path: Path):
        """
        Given a string parameter that looks like a closing markup tag
        When the prompt is rendered
        Then the parameter is escaped and non-string parameters pass through
        """
        layout = tmp_path / "layout.txt"
        layout.write_text("{content}")
        template = tmp_path / "confirmer.txt"
        template.write_text("{params[item]}|{params[id]}")
        controller.set_layout_file(layout).set_template_file(template)
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("deleteItem", {"item": "[/]", "id": 7})

        assert controller.render() == "\\[/]|7"
        assert controller.active is not None
        assert controller.active.params["item"] == "[/]"

    def test_missing_layout_is_invalid_state(self, controller: DialogController, tmp_path: Path):
        """
        Given a layout path that does not exist
        When the controller renders, even while idle
        Then InvalidStateError is raised
        """
        controller.set_layout_file(tmp_path / "missing.txt")
        with pytest.raises(InvalidStateError):
            controller.render()

    def test_missing_template_is_invalid_state(self, controller: DialogController, tmp_path: Path):
        controller.set_template_file(tmp_path / "missing.txt")
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("deleteItem")
        with pytest.raises(InvalidStateError):
            controller.render()

    def test_unknown_template_field_is_invalid_state(
        self, controller: DialogController, tmp_path: Path
    ):
        template = tmp_path / "confirmer.txt"
        template.write_text("{nope}")
        controller.set_template_file(template)
        controller.define_confirmer("deleteItem", Recorder(), "Delete?", "Confirm")
        controller.activate("deleteItem")
        with pytest.raises(InvalidStateError):
            controller.render()

    def test_none_restores_default_template(self, controller: DialogController, tmp_path: Path):
        controller.set_template_file(tmp_path / "x.txt").set_template_file(None)
        assert controller.get_template_file() == DEFAULT_TEMPLATE_FILE
