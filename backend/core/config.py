import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Delay applied before every store call to mimic a network round trip
    simulated_latency_ms: int = int(os.getenv("SIMULATED_LATENCY_MS", "300"))
    seed_demo_data: bool = os.getenv("SEED_DEMO_DATA", "True").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Export / import
    csv_delimiter: str = os.getenv("CSV_DELIMITER", ",")


settings = Settings()
