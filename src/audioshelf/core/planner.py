"""Rename planner for audiobook files.

This module builds one RenamePlan per file that has metadata, using a naming
RuleSet. Planning is pure: every call returns fresh plans and nothing on disk
is touched until the batch executor runs.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

from audioshelf.core.sanitizer import validate_path
from audioshelf.models.core import FileRecord, MetadataRecord, NamingOptions
from audioshelf.models.plan import RenamePlan
from audioshelf.rules.base import RuleSet
from audioshelf.rules.template import TemplateRuleSet

logger = logging.getLogger(__name__)


@dataclass
class RenamePlanBuildContext:
    """Context for building rename plans, grouping all required arguments."""

    files: Sequence[FileRecord]
    metadata: Mapping[str, MetadataRecord]
    rule_set: RuleSet
    options: NamingOptions = field(default_factory=NamingOptions)


def _original_directory(file: FileRecord) -> str:
    return str(Path(file.path).parent)


def plan_file(
    file: FileRecord,
    metadata: MetadataRecord,
    rule_set: RuleSet,
    options: NamingOptions,
) -> RenamePlan:
    """Build the rename plan for a single file.

    With ``create_directories`` the destination comes from the rule set's
    target path under the file's current directory; otherwise the file keeps
    its directory and only its name changes.
    """
    original_dir = _original_directory(file)
    new_name = rule_set.target_name(metadata, file.extension, options)
    if options.create_directories:
        new_path = rule_set.target_path(metadata, original_dir, file.extension, options)
    else:
        new_path = str(Path(original_dir, new_name))

    validation = validate_path(new_path)
    if not validation.is_valid:
        logger.warning(
            "Planned path for %s may not be portable: %s",
            file.name,
            "; ".join(validation.errors),
        )

    return RenamePlan(
        id=file.id,
        original_name=file.name,
        new_name=new_name,
        original_path=file.path,
        new_path=new_path,
        extension=file.extension,
        metadata=metadata,
        file=file,
    )


def build_rename_plan(ctx: RenamePlanBuildContext) -> list[RenamePlan]:
    """Create rename plans for every file in *ctx* that has metadata.

    Files without metadata are skipped. Plans keep the order of ``ctx.files``.
    """
    plans: list[RenamePlan] = []
    for file in ctx.files:
        metadata = ctx.metadata.get(file.id)
        if metadata is None:
            logger.debug("No metadata for %s, skipping", file.name)
            continue
        plans.append(plan_file(file, metadata, ctx.rule_set, ctx.options))
    logger.debug("Planned %d of %d files", len(plans), len(ctx.files))
    return plans


def create_rename_plan(
    files: Sequence[FileRecord],
    metadata: Mapping[str, MetadataRecord],
    pattern: Optional[str] = None,
    options: Optional[NamingOptions] = None,
) -> list[RenamePlan]:
    """Create rename plans from a naming pattern.

    Args:
        files: Files from the file provider.
        metadata: Metadata keyed by FileRecord id.
        pattern: Naming pattern or preset name (default: ``standard``).
        options: Naming options (defaults when omitted).

    Returns:
        One RenamePlan per file that has metadata, in input order.
    """
    return build_rename_plan(
        RenamePlanBuildContext(
            files=files,
            metadata=metadata,
            rule_set=TemplateRuleSet(pattern),
            options=options or NamingOptions(),
        )
    )
