from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RunContext:
    """
    Shared pipeline context.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    input_paths: List[str] = field(default_factory=list)
    output_path: Optional[str] = None
    data_dir: Optional[str] = None

    # Injected taxonomy registry; None means "build the default one"
    registry: Any = None

    stats: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    validate: bool = False
    debug: bool = False
