import json
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Prefecture:
    code: str
    name: str
    name_en: str
    cost_index: float  # 1.0 = national average cost of living
    region: str


class PrefectureDirectory:
    """Regional cost-of-living table loaded from ``reference/prefectures.json``."""

    def __init__(self, ref_path: Optional[str] = None):
        path = ref_path or os.path.normpath(
            os.path.join(os.path.dirname(__file__), '..', '..', 'reference', 'prefectures.json'))
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        entries = data.get("prefectures", [])
        if not entries:
            raise ValueError("prefectures.json must contain a 'prefectures' array with at least one entry")

        self._by_code: Dict[str, Prefecture] = {}
        for entry in entries:
            code = entry["code"]
            if code in self._by_code:
                raise ValueError(f"Duplicate prefecture code '{code}' in prefectures.json")
            self._by_code[code] = Prefecture(
                code=code,
                name=entry["name"],
                name_en=entry.get("nameEn", code),
                cost_index=entry["costIndex"],
                region=entry.get("region", "")
            )

    def get(self, code: str) -> Optional[Prefecture]:
        return self._by_code.get(code)

    def cost_index(self, code: str) -> float:
        """Cost index for a prefecture code; unknown codes use the national average."""
        pref = self.get(code)
        return pref.cost_index if pref else 1.0

    def name(self, code: str) -> str:
        pref = self.get(code)
        return pref.name if pref else code

    def all(self) -> List[Prefecture]:
        return list(self._by_code.values())

    def by_region(self) -> Dict[str, List[Prefecture]]:
        regions: Dict[str, List[Prefecture]] = {}
        for pref in self._by_code.values():
            regions.setdefault(pref.region, []).append(pref)
        return regions


@lru_cache(maxsize=1)
def default_prefectures() -> PrefectureDirectory:
    return PrefectureDirectory()
