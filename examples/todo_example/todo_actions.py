from typing import ClassVar

from pystorecell import Action, create_action


class Add(Action):
    type: ClassVar[str] = "[Todo] Add"
    todo: str


class SetDone(Action):
    type: ClassVar[str] = "[Todo] SetDone"
    index: int


# create_action 風格的 Action
clear_done = create_action("[Todo] Clear Done")
saved = create_action("[Stats] Saved")
