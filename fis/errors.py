"""
Exceptions raised while configuring a fuzzy inference engine.

Every failure the engine can report is a configuration-time failure: shapes,
rule wiring and rule tables are checked when they are added, so the decision
loop itself only ever sees valid structures.
"""


class ConfigurationError(ValueError):
    """A membership function, rule or rule table is malformed."""


class UnknownMembershipFunctionError(ConfigurationError, KeyError):
    """A rule or update refers to a membership function that was never added."""

    def __init__(self, name: str, kind: str):
        self.name = name
        self.kind = kind
        super().__init__(f"Unknown {kind} membership function '{name}'")

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes.
        return self.args[0]
