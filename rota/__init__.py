"""Weekly task rota: assigns recurring tasks to a roster with fair rotation.

Modules:
- config: load and validate the roster/task configuration (YAML or JSON)
- constraints: eligibility predicate and rotation guard
- scoring: load tracker and least-loaded band selection
- engine: category schedulers and the orchestrator
- io: previous-period CSV import and schedule export
- validator: post-generation checks and summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "constraints",
    "scoring",
    "engine",
    "io",
    "validator",
    "cli",
]
