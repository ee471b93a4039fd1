from prompt_kit.git.abc import Git
from prompt_kit.git.fake import FakeGit
from prompt_kit.git.real import RealGit

__all__ = ["FakeGit", "Git", "RealGit"]
