"""
Lint messages produced by analysis and by the processor service.

A LintMessage is a severity-tagged diagnostic. Analysis of each derived
file yields one list of messages; postprocessing folds the per-block lists
back into a single list for the original file.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Optional


class Severity(IntEnum):
    """Message severity, as configured per rule."""

    OFF = 0
    WARN = 1
    ERROR = 2


@dataclass
class LintMessage:
    """
    A single diagnostic reported against a file.

    Attributes:
        message (str): Human-readable description of the problem
        severity (Severity): Severity level
        rule_id (Optional[str]): Rule that produced the message, if any
        line (Optional[int]): 1-based line of the problem
        column (Optional[int]): Column of the problem
        fatal (bool): Whether the file could not be analyzed at all
        node_type (Optional[str]): Syntax node type the message refers to
        end_line (Optional[int]): Line where the problem ends
        end_column (Optional[int]): Column where the problem ends
    """

    message: str
    severity: Severity = Severity.ERROR
    rule_id: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    fatal: bool = False
    node_type: Optional[str] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    @classmethod
    def preprocessing_failure(
        cls, message: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> "LintMessage":
        """Build the fatal message reported when a processor cannot split a file."""
        return cls(
            message=message,
            severity=Severity.ERROR,
            rule_id=None,
            line=line,
            column=column,
            fatal=True,
            node_type=None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary shape report formatters consume."""
        data = {
            "ruleId": self.rule_id,
            "severity": int(self.severity),
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "fatal": self.fatal,
            "nodeType": self.node_type,
        }
        if self.end_line is not None:
            data["endLine"] = self.end_line
        if self.end_column is not None:
            data["endColumn"] = self.end_column
        return data


def flatten_messages(groups: Iterable[Iterable[LintMessage]]) -> List[LintMessage]:
    """Concatenate per-block message lists, keeping block order."""
    return [message for group in groups for message in group]
