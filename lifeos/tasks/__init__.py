"""Task Engine - the to-do list as pure list transforms

Every operation takes the current task list and returns a new one.
Nothing here touches the store; the to-do service persists the result.

Components:
    reconciler.py: add, subdivide, prioritize, toggle, delete, display order

Key rule:
    AI prioritization answers with positions in the open-task view that
    was shown to it. Those positions are resolved against a snapshot of
    that view (OpenTaskSnapshot), never against whatever the list looks
    like when the answer arrives.
"""
