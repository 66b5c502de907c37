from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Literal

from .config import BookConfig
from .errors import MissingSourceError

logger = logging.getLogger(__name__)

StepKind = Literal["tree", "file", "category"]

CATEGORIES = ("introduction", "chapters", "appendices")
INDEX_FILE = "index.md"
CONTENT_SUFFIX = ".md"

@dataclass(frozen=True)
class SourceLayout:
    assets: str = "docs/assets"
    layouts: str = "docs/_layouts"
    includes: str = "docs/_includes"
    generator_config: str = "docs/_config.yml"
    gemfile: str = "docs/Gemfile"
    nojekyll: str = "docs/.nojekyll"
    index: str = "src/index.md"
    content_root: str = "src"
    navigation: str = "docs/_data"

@dataclass(frozen=True)
class PublishStep:
    kind: StepKind
    source: Path
    target: Path
    required: bool = True

    def to_json_obj(self) -> dict:
        return {
            "kind": self.kind,
            "source": str(self.source),
            "target": str(self.target),
            "required": self.required,
        }

@dataclass
class BuildReport:
    output_directory: Path
    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.written)

class BookBuilder:
    def __init__(self, config: BookConfig, root: str | Path = ".", layout: SourceLayout | None = None):
        self.config = config
        self.root = Path(root)
        self.layout = layout or SourceLayout()
        self.output_dir = config.output_directory

    def _src(self, rel: str) -> Path:
        return self.root / rel

    def plan(self) -> List[PublishStep]:
        """Ordered publish steps, without touching the filesystem."""
        lay = self.layout
        out = self.output_dir
        steps = [
            PublishStep("tree", self._src(lay.assets), out / "assets", required=False),
            PublishStep("tree", self._src(lay.layouts), out / "_layouts", required=False),
            PublishStep("tree", self._src(lay.includes), out / "_includes", required=False),
            PublishStep("file", self._src(lay.generator_config), out / "_config.yml"),
            PublishStep("file", self._src(lay.gemfile), out / "Gemfile"),
            PublishStep("file", self._src(lay.nojekyll), out / ".nojekyll"),
            PublishStep("file", self._src(lay.index), out / INDEX_FILE),
        ]
        for category in CATEGORIES:
            steps.append(PublishStep("category", self._src(lay.content_root) / category, out / category))
        steps.append(PublishStep("tree", self._src(lay.navigation), out / "_data"))
        return steps

    def build(self) -> BuildReport:
        logger.info("Building book into %s", self.output_dir)
        report = BuildReport(output_directory=self.output_dir)
        clear_directory(self.output_dir)
        for step in self.plan():
            self.run_step(step, report)
        logger.info("Build complete: %d files", report.file_count)
        return report

    def run_step(self, step: PublishStep, report: BuildReport) -> None:
        if not step.source.exists():
            if step.required:
                raise MissingSourceError(f"Required source not found: {step.source}", str(step.source))
            logger.debug("Skipping missing %s", step.source)
            report.skipped.append(step.source)
            return
        if step.kind == "category":
            report.written.extend(copy_category(step.source, step.target))
        elif step.kind == "tree":
            report.written.extend(copy_tree(step.source, step.target))
        else:
            report.written.append(copy_file(step.source, step.target))

def clear_directory(path: Path) -> None:
    """Create ``path`` if absent, otherwise remove everything inside it."""
    if not path.exists():
        path.mkdir(parents=True)
        return
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()

def copy_file(src: Path, dst: Path) -> Path:
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
    logger.debug("Copied %s -> %s", src, dst)
    return dst

def copy_tree(src: Path, dst: Path) -> List[Path]:
    shutil.copytree(src, dst, dirs_exist_ok=True)
    logger.debug("Copied tree %s -> %s", src, dst)
    return sorted(p for p in dst.rglob("*") if p.is_file())

def iter_category_sources(src_dir: Path) -> Iterator[tuple[Path, Path]]:
    # Subdirectories contribute only their index file; nothing deeper is walked.
    for item in sorted(src_dir.iterdir()):
        if item.is_dir():
            index = item / INDEX_FILE
            if index.is_file():
                yield index, Path(item.name) / INDEX_FILE
        elif item.name.endswith(CONTENT_SUFFIX):
            yield item, Path(item.name)

def copy_category(src_dir: Path, dst_dir: Path) -> List[Path]:
    dst_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for sub in sorted(p for p in src_dir.iterdir() if p.is_dir()):
        (dst_dir / sub.name).mkdir(exist_ok=True)
    for src, rel in iter_category_sources(src_dir):
        written.append(copy_file(src, dst_dir / rel))
    return written
