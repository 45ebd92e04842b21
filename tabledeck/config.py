from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TABLEDECK_")

    app_name: str = "TableDeck"
    debug: bool = False
    log_level: str = "INFO"

    card_database_path: Path = DATA_DIR / "default-cards.json"
    scryfall_bulk_api: str = "https://api.scryfall.com/bulk-data"
    http_timeout: float = 30.0

    # Back image for single-faced cards
    card_back_url: str = (
        "https://backs.scryfall.io/large/2/2/222b7a3b-2321-4d4c-af19-19338b134971.jpg"
    )

    # Overrides the platform default Tabletop Simulator "Saved Objects" directory
    saved_objects_dir: Path | None = None


settings = Settings()
