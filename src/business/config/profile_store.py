"""
Profile Store - 策略档案存储

CapitalProfile 以 JSON 保存在 ~/.fundarb/profile.json。
"""

import json
import logging
from pathlib import Path

from src.business.config.client_config import get_config_dir
from src.engine.models.profile import CapitalProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    """CapitalProfile 的文件存储"""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_config_dir() / "profile.json"

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> CapitalProfile | None:
        """读取档案，文件缺失或无法解析时返回 None"""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return CapitalProfile.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning(f"Failed to load profile {self.path}: {e}")
            return None

    def save(self, profile: CapitalProfile) -> Path:
        """写入档案"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(profile.to_dict(), f, indent=2)
        logger.debug(f"Profile saved to {self.path}")
        return self.path
