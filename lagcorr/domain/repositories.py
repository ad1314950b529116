from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd


class SourceRepository(ABC):
    @abstractmethod
    def load_cases(self) -> pd.DataFrame:
        raise NotImplementedError

    @abstractmethod
    def load_hospital(self) -> pd.DataFrame:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError
