"""Application session: switching between the menu and a drawing, dialogs and deferred actions."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from rustique.localization import Language, get_text
from rustique.menu import LanguageChanged, MainMenu, MenuResult, NewCanvas, OpenFile
from rustique.painter import PaintApp, PaintError

DEFAULT_NEW_LAYER_NAME = "New Layer"
_SAVE_ANSWERS = frozenset({"yes", "no", "cancel"})


class PendingAction(Enum):
    """Work deferred to the start of the next frame."""

    NONE = "none"
    RETURN_TO_MENU = "return_to_menu"
    HANDLE_LAYER_ACTION = "handle_layer_action"
    UNDO = "undo"
    REDO = "redo"


class LayerAction(Enum):
    """Things the layer list can ask for."""

    TOGGLE_VISIBILITY = "toggle_visibility"
    SET_ACTIVE = "set_active"
    EDIT = "edit"


class Session:
    """The whole application state apart from the window itself.

    ``state`` is either the start menu or the open drawing.
    """

    def __init__(self, language: Language = Language.FRENCH) -> None:
        self.language = language
        self.state: Union[MainMenu, PaintApp] = MainMenu(language)
        self.error_message: Optional[str] = None
        self.show_error = False
        self.new_layer_name = DEFAULT_NEW_LAYER_NAME
        self.rename_layer_index: Optional[int] = None
        self.rename_layer_name = ""
        self.pending_action = PendingAction.NONE
        self._layer_request: Optional[tuple[LayerAction, int]] = None

    @property
    def canvas(self) -> Optional[PaintApp]:
        """The open drawing, or None while the menu is shown."""
        return self.state if isinstance(self.state, PaintApp) else None

    @property
    def menu(self) -> Optional[MainMenu]:
        """The start menu, or None while a drawing is open."""
        return self.state if isinstance(self.state, MainMenu) else None

    @property
    def error_text(self) -> str:
        """The message to show in the error dialog."""
        if self.error_message is None:
            return get_text("an_error_occurred", self.language)
        return self.error_message

    # ------------------------------------------------------------ menu

    def handle_menu_result(self, result: MenuResult, path: Optional[str] = None) -> None:
        """Act on a choice made in the start menu.

        For :class:`OpenFile`, ``path`` is the file picked, or None when the
        user cancelled the file chooser.
        """
        if self.menu is None:
            raise RuntimeError("menu choices can only be handled while the menu is shown")
        if isinstance(result, NewCanvas):
            self.state = PaintApp(result.width, result.height, self.language)
        elif isinstance(result, OpenFile):
            if path is None:
                return
            try:
                self.state = PaintApp.open_file(path, self.language)
            except PaintError as exc:
                self.report_error(str(exc))
        elif isinstance(result, LanguageChanged):
            self.language = result.language
            self.state = MainMenu(result.language)
        else:
            raise TypeError(f"unknown menu result: {result!r}")

    # ------------------------------------------------------------ deferred work

    def request(
        self, action: Union[PendingAction, LayerAction], index: Optional[int] = None
    ) -> None:
        """Defer an action to the next call of :meth:`process_pending`.

        Layer actions need the index of the layer they apply to.
        """
        if isinstance(action, LayerAction):
            if index is None:
                raise ValueError(f"{action.name} needs a layer index")
            self.pending_action = PendingAction.HANDLE_LAYER_ACTION
            self._layer_request = (action, index)
            return
        if action is PendingAction.HANDLE_LAYER_ACTION:
            raise ValueError("request the LayerAction itself, with its index")
        self.pending_action = action
        self._layer_request = None

    def process_pending(self) -> None:
        """Carry out the deferred action, if any, and clear it."""
        action = self.pending_action
        layer_request = self._layer_request
        self.pending_action = PendingAction.NONE
        self._layer_request = None
        canvas = self.canvas

        if action is PendingAction.RETURN_TO_MENU:
            self.state = MainMenu(self.language)
        elif action is PendingAction.UNDO:
            if canvas is not None:
                canvas.undo()
        elif action is PendingAction.REDO:
            if canvas is not None:
                canvas.redo()
        elif action is PendingAction.HANDLE_LAYER_ACTION:
            if canvas is not None and layer_request is not None:
                self._apply_layer_action(canvas, *layer_request)

    def _apply_layer_action(self, canvas: PaintApp, action: LayerAction, index: int) -> None:
        if action is LayerAction.TOGGLE_VISIBILITY:
            canvas.toggle_layer_visibility(index)
        elif action is LayerAction.SET_ACTIVE:
            canvas.set_active_layer(index)
        elif action is LayerAction.EDIT:
            layers = canvas.current_state.layers
            if 0 <= index < len(layers):
                self.rename_layer_index = index
                self.rename_layer_name = layers[index].name

    # ------------------------------------------------------------ leaving and saving

    def request_return_to_menu(self) -> None:
        """Go back to the menu, first asking to save if there are unsaved changes."""
        canvas = self.canvas
        if canvas is not None and canvas.has_unsaved_changes:
            canvas.show_save_dialog(True)
        else:
            self.pending_action = PendingAction.RETURN_TO_MENU
            self._layer_request = None

    def answer_save_dialog(self, answer: str, path: Optional[str] = None) -> None:
        """Answer the "save changes?" question with "yes", "no" or "cancel".

        With "yes", ``path`` is where to save, or None if the user cancelled
        the file chooser; a failed save keeps the question open.
        """
        if answer not in _SAVE_ANSWERS:
            raise ValueError(f"unknown answer: {answer!r}")
        canvas = self.canvas
        if canvas is None or canvas.save_dialog is None:
            return
        return_to_menu = canvas.save_dialog

        if answer == "yes":
            if path is not None:
                try:
                    canvas.save_file(path)
                except PaintError as exc:
                    self.report_error(str(exc))
                    return
            canvas.hide_save_dialog()
            if return_to_menu:
                self.pending_action = PendingAction.RETURN_TO_MENU
        elif answer == "no":
            canvas.hide_save_dialog()
            if return_to_menu:
                self.pending_action = PendingAction.RETURN_TO_MENU
        else:
            canvas.hide_save_dialog()

    def save_to(self, path: str) -> bool:
        """Save the drawing to ``path``; report and return False on failure."""
        canvas = self.canvas
        if canvas is None:
            return False
        try:
            canvas.save_file(path)
        except PaintError as exc:
            self.report_error(str(exc))
            return False
        return True

    def quick_save(self) -> bool:
        """Save again to the last path; report and return False on failure."""
        canvas = self.canvas
        if canvas is None:
            return False
        try:
            canvas.quick_save()
        except PaintError as exc:
            self.report_error(str(exc))
            return False
        return True

    # ------------------------------------------------------------ dialogs

    def confirm_rename(self, name: str) -> None:
        """Rename the layer being edited; an empty name leaves the dialog open."""
        self.rename_layer_name = name
        if self.rename_layer_index is None or not name:
            return
        canvas = self.canvas
        if canvas is not None:
            canvas.rename_layer(self.rename_layer_index, name)
        self.rename_layer_index = None

    def cancel_rename(self) -> None:
        """Close the rename dialog without renaming."""
        self.rename_layer_index = None

    def report_error(self, message: str) -> None:
        """Show an error message."""
        self.error_message = message
        self.show_error = True

    def dismiss_error(self) -> None:
        """Close the error dialog."""
        self.show_error = False