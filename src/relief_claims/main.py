"""CLI entry point for relief claims.

Commands work on JSON claim records; the CLI keeps no state between runs.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from relief_claims.exceptions import ClaimError, ClaimValidationError, InvalidTransitionError


def _setup_logging() -> None:
    """Configure logging for CLI usage from the current environment."""
    from relief_claims.observability import configure_logging

    configure_logging()


def _usage() -> str:
    return """Usage:
  relief-claims create <claim.json>                 Validate intake data and print a new claim record
  relief-claims transition <record.json> <STATUS>   Apply a status transition to a claim record
  relief-claims transitions [STATUS]                List allowed transitions (all, or from STATUS)

Options:
  --debug                                           Enable debug logging
  --json                                            Use JSON log format
"""


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _read_json(path: Path) -> Any:
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON in {path}: {e}")


def cmd_create(claim_path: Path) -> None:
    """Create a claim from an intake JSON file and print its record."""
    from relief_claims.models.claim import Claim
    from relief_claims.models.inputs import ClaimInput, validate_model
    from relief_claims.utils.sanitization import sanitize_claim_data

    claim_data = _read_json(claim_path)
    if not isinstance(claim_data, dict):
        _fail(f"Invalid claim data in {claim_path}: expected a JSON object")
    try:
        claim_input = validate_model(ClaimInput, sanitize_claim_data(claim_data))
        claim = Claim.from_input(claim_input)
    except ClaimValidationError as e:
        _fail(f"Invalid claim data: {e}")
    print(json.dumps(claim.to_record(), indent=2))


def cmd_transition(record_path: Path, target_status: str) -> None:
    """Apply a transition to a claim record file and print the updated record."""
    from relief_claims.models.claim import Claim

    record = _read_json(record_path)
    try:
        claim = Claim.from_record(record)
        claim.update_status(target_status)
    except InvalidTransitionError as e:
        _fail(f"{e}. Allowed: {', '.join(s.value for s in claim.allowed_transitions()) or 'none'}")
    except ClaimError as e:
        _fail(str(e))
    print(json.dumps(claim.to_record(), indent=2))


def cmd_transitions(status: str | None = None) -> None:
    """Print the allowed transitions from status, or the whole table."""
    from relief_claims.lifecycle.state_machine import coerce_status, get_state_machine

    machine = get_state_machine()
    if status is not None:
        try:
            current = coerce_status(status)
        except ClaimValidationError as e:
            _fail(str(e))
        print(json.dumps([s.value for s in machine.allowed_transitions(current)], indent=2))
        return
    table = {
        current.value: [s.value for s in machine.allowed_transitions(current)]
        for current in machine.TRANSITIONS
    }
    print(json.dumps(table, indent=2))


def main() -> None:
    """Run the relief claims CLI: create, transition, or transitions."""
    load_dotenv()

    argv = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    options = [arg for arg in sys.argv[1:] if arg.startswith("--")]

    if "--json" in options:
        os.environ["RELIEF_CLAIMS_LOG_FORMAT"] = "json"
    if "--debug" in options:
        os.environ["RELIEF_CLAIMS_LOG_LEVEL"] = "DEBUG"

    _setup_logging()

    if not argv:
        print(_usage(), file=sys.stderr)
        sys.exit(1)

    command = argv[0].lower()

    if command == "create":
        if len(argv) < 2:
            print("Error: create requires <claim.json>", file=sys.stderr)
            print(_usage(), file=sys.stderr)
            sys.exit(1)
        cmd_create(Path(argv[1]))
        return

    if command == "transition":
        if len(argv) < 3:
            print("Error: transition requires <record.json> <STATUS>", file=sys.stderr)
            print(_usage(), file=sys.stderr)
            sys.exit(1)
        cmd_transition(Path(argv[1]), argv[2])
        return

    if command == "transitions":
        cmd_transitions(argv[1] if len(argv) > 1 else None)
        return

    print(f"Error: Unknown command: {command}", file=sys.stderr)
    print(_usage(), file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
