"""Cart panel visibility. Not persisted: every fresh start begins closed."""
from dataclasses import dataclass


@dataclass
class CartPanel:
    is_open: bool = False

    def toggle(self) -> bool:
        self.is_open = not self.is_open
        return self.is_open

    def close(self) -> bool:
        self.is_open = False
        return self.is_open
