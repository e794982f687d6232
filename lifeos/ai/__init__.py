"""AI Coach - prompt construction and Gemini completions

Philosophy:
    The AI is best effort. Transport failures and malformed answers are
    expected outcomes, not bugs: the client returns an empty default and
    emits one notification, and the schema layer turns anything that is
    not the exact shape we asked for into an AIFormatError before it can
    reach the task list.

Components:
    client.py: CompletionClient (one attempt per call, no retries)
    schemas.py: Strict validators for JSON-mode answers
    prompts.py: Prompt builders embedding serialized app state
"""

# Shown to the user whenever a completion fails
FAILURE_MESSAGE = "The AI could not respond."

__all__ = ["FAILURE_MESSAGE"]
