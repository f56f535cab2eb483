"""
pipeline.py - Full Generation Pipeline

Runs clean -> organize -> types -> components in order, then formats
generated files
"""

from dataclasses import dataclass, field
from pathlib import Path
from threading import Event
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from .config import AssetCodegenConfig
from .format_files import format_files
from .gen_components import ComponentsResult, generate_components
from .gen_types import TypesResult, generate_types
from .models_fs import PassSummary
from .run_passes import run_clean_pass, run_organize_pass


STEP_CLEAN = "clean"
STEP_ORGANIZE = "organize"
STEP_TYPES = "types"
STEP_COMPONENTS = "components"

ALL_STEPS = (STEP_CLEAN, STEP_ORGANIZE, STEP_TYPES, STEP_COMPONENTS)

# Accepted spellings for --steps, including the configuration flag names
STEP_ALIASES: Dict[str, str] = {
    "clean": STEP_CLEAN,
    "cleanup": STEP_CLEAN,
    "cleanupduplicates": STEP_CLEAN,
    "organize": STEP_ORGANIZE,
    "organizefilenames": STEP_ORGANIZE,
    "types": STEP_TYPES,
    "generatetypes": STEP_TYPES,
    "components": STEP_COMPONENTS,
    "component": STEP_COMPONENTS,
    "generatecomponent": STEP_COMPONENTS,
}


@dataclass
class PipelineResult:
    """Pipeline execution result"""
    steps: List[str] = field(default_factory=list)
    pass_summaries: List[PassSummary] = field(default_factory=list)
    types_result: Optional[TypesResult] = None
    components_result: Optional[ComponentsResult] = None
    generated_files: List[Path] = field(default_factory=list)
    completed_steps: int = 0
    formatted: bool = False

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def has_failures(self) -> bool:
        return any(s.has_failures for s in self.pass_summaries)


def resolve_steps(config: AssetCodegenConfig, requested: Optional[Sequence[str]] = None) -> List[str]:
    """
    Decide which steps run

    Explicitly requested steps win; otherwise feature flags select the
    renaming passes and component generation; type generation always runs.

    Raises:
        ValueError: Unknown step name
    """
    if requested:
        wanted = set()
        for name in requested:
            key = name.strip().lower().replace("-", "").replace("_", "")
            if not key:
                continue
            if key not in STEP_ALIASES:
                raise ValueError(f"Unknown step: {name} (choose from {', '.join(ALL_STEPS)})")
            wanted.add(STEP_ALIASES[key])
        return [step for step in ALL_STEPS if step in wanted]

    steps = []
    if config.feature_flags.cleanup_duplicates:
        steps.append(STEP_CLEAN)
    if config.feature_flags.organize_filenames:
        steps.append(STEP_ORGANIZE)
    steps.append(STEP_TYPES)
    if config.feature_flags.generate_component and config.component_generation.enabled:
        steps.append(STEP_COMPONENTS)
    return steps


def run_pipeline(
    config: AssetCodegenConfig,
    steps: Optional[Sequence[str]] = None,
    dry_run: bool = False,
    max_workers: int = 1,
    cancel_event: Optional[Event] = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> PipelineResult:
    """
    Run the selected steps

    In dry_run mode the renaming passes only preview and no files are
    generated.
    """
    result = PipelineResult(steps=resolve_steps(config, steps))

    for index, step in enumerate(result.steps, start=1):
        logger.info(f"📝 {index}/{result.total_steps}: {step}")
        if step == STEP_CLEAN:
            result.pass_summaries.append(run_clean_pass(
                config, dry_run=dry_run, max_workers=max_workers,
                cancel_event=cancel_event, progress_callback=progress_callback,
            ))
        elif step == STEP_ORGANIZE:
            result.pass_summaries.append(run_organize_pass(
                config, dry_run=dry_run, max_workers=max_workers,
                cancel_event=cancel_event, progress_callback=progress_callback,
            ))
        elif step == STEP_TYPES:
            if dry_run:
                logger.info("[Preview] Skipping types file generation")
            else:
                result.types_result = generate_types(config)
                result.generated_files.extend(result.types_result.generated_files)
        elif step == STEP_COMPONENTS:
            if dry_run:
                logger.info("[Preview] Skipping component generation")
            else:
                result.components_result = generate_components(config)
                result.generated_files.extend(result.components_result.generated_files)
        result.completed_steps += 1

    if result.generated_files and not dry_run:
        result.formatted = format_files(result.generated_files, config)

    return result
