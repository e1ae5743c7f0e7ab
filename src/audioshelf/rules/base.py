"""Base abstract class for naming rule sets.

- RuleSet: Abstract base class for all rule sets, enforcing a consistent
  interface for target filename and target path generation.

Design:
- The planner only talks to a RuleSet, so alternative naming schemes can be
  added without changing the planner or CLI logic.
- Rule sets never touch the file system; they return names and path strings.
"""

from abc import ABC, abstractmethod
from typing import Self

from audioshelf.models.core import MetadataRecord, NamingOptions


# Reason: RuleSet is an abstract base class (ABC) to enforce a consistent
# interface for all naming logic.
class RuleSet(ABC):
    """Abstract base class for audiobook naming rule sets."""

    def __init__(self: Self, name: str) -> None:
        """Initialize a rule set.

        Args:
            name: Short name of the rule set, used in logs and reports.
        """
        self.name = name

    @abstractmethod
    def target_name(
        self: Self,
        metadata: MetadataRecord,
        extension: str,
        options: NamingOptions,
    ) -> str:
        """Generate the new file name for a file.

        Args:
            metadata: Metadata associated with the file.
            extension: Original extension, without the dot.
            options: Naming options.

        Returns:
            The new file name, ending with the extension.
        """

    @abstractmethod
    def target_path(
        self: Self,
        metadata: MetadataRecord,
        base_path: str,
        extension: str,
        options: NamingOptions,
    ) -> str:
        """Generate the new full path for a file under *base_path*.

        Returns:
            A path string whose basename equals :meth:`target_name`.
        """
