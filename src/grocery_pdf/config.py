from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("grocery-pdf", alias="APP_NAME")

    # Logging (CLI sink only; the library never configures loguru)
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # CLI output
    json_indent: int = Field(2, alias="JSON_INDENT")

    # pdfplumber: horizontal gap (pt) tolerated inside one text run / token
    pdf_x_tolerance: float = Field(3.0, alias="PDF_X_TOLERANCE")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

settings = Settings()
