from __future__ import annotations

from ._core_base import *  # noqa: F401,F403
from ._core_config import *  # noqa: F401,F403
from ._core_runner import *  # noqa: F401,F403
from ._core_revisions import *  # noqa: F401,F403
from ._core_orchestration import *  # noqa: F401,F403
