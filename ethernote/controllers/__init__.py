from ethernote.controllers.note_lifecycle import NoteLifecycleController
from ethernote.controllers.note_list import NoteListController

__all__ = ["NoteLifecycleController", "NoteListController"]
