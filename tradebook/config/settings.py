import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    decimal_precision: int = int(os.getenv("TRADEBOOK_DECIMAL_PRECISION", "28"))
    log_level: str = os.getenv("TRADEBOOK_LOG_LEVEL", "INFO")
    starting_side: str = os.getenv("TRADEBOOK_STARTING_SIDE", "BUY")

    def __post_init__(self) -> None:
        if self.decimal_precision <= 0:
            raise ValueError("decimal_precision must be > 0")
