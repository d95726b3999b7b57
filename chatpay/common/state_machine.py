"""Payment-intent pipeline stages and the transitions allowed between them."""

START = "START"
CREDENTIALS_RESOLVED = "CREDENTIALS_RESOLVED"
ENVIRONMENT_SELECTED = "ENVIRONMENT_SELECTED"
AMOUNT_VALIDATED = "AMOUNT_VALIDATED"
INTENT_CREATED = "INTENT_CREATED"
RESPONDED = "RESPONDED"
FAILED = "FAILED"

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    START: {CREDENTIALS_RESOLVED, FAILED},
    CREDENTIALS_RESOLVED: {ENVIRONMENT_SELECTED, FAILED},
    ENVIRONMENT_SELECTED: {AMOUNT_VALIDATED, FAILED},
    AMOUNT_VALIDATED: {INTENT_CREATED, FAILED},
    INTENT_CREATED: {RESPONDED, FAILED},
    RESPONDED: set(),
    FAILED: set(),
}


def validate_transition(current: str, new: str) -> None:
    """Raise when a transition is not allowed by the pipeline."""

    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ValueError(f"Invalid transition: {current} -> {new}")
