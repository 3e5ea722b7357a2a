"""Write fetched components into the project directory."""

from pathlib import Path
from typing import Callable

from cct.constants import EXECUTABLE_SUFFIXES
from cct.exceptions import ParseError, UserCancelledError
from cct.fetcher.skills import SkillBundle


def _is_script(path: Path) -> bool:
    return path.suffix in EXECUTABLE_SUFFIXES


def write_text(project_dir: Path, relative_path: Path | str, content: str) -> Path:
    """Write content to project_dir/relative_path, replacing any existing file.

    Scripts (``.py``, ``.sh``) are made executable.
    """
    target = project_dir / relative_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    if _is_script(target):
        target.chmod(0o755)
    return target


def write_skill(project_dir: Path, skill_dir: Path | str, bundle: SkillBundle) -> list[Path]:
    """Write every file of a downloaded skill under project_dir/skill_dir.

    Raises:
        ParseError: If a file path would land outside the skill directory;
            nothing is written in that case
    """
    root = (project_dir / skill_dir).resolve()
    for relative in bundle.files:
        if not (root / relative).resolve().is_relative_to(root):
            raise ParseError(f"Skill file {relative!r} escapes {Path(skill_dir).as_posix()}")

    written = []
    for relative, content in bundle.files.items():
        written.append(write_text(project_dir, Path(skill_dir) / relative, content))
    return written


def confirm_overwrite(
    path: Path,
    assume_yes: bool,
    confirm: Callable[[str], bool],
) -> None:
    """Ask before replacing an existing singleton file.

    Raises:
        UserCancelledError: If the file exists and the operator declines
    """
    if not path.exists() or assume_yes:
        return
    if not confirm(f"{path.name} already exists. Overwrite it?"):
        raise UserCancelledError(f"Kept existing {path.name}")
