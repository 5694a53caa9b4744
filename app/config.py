from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    openai_api_key: str | None = None
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 400

    jina_api_key: str | None = None
    reader_base_url: str = "https://r.jina.ai"
    reader_timeout: float = 30.0
    max_input_chars: int = 12000

    # Length windows for the generated tags
    title_min_length: int = 49
    title_max_length: int = 59
    title_cut_threshold: int = 40
    description_min_length: int = 140
    description_max_length: int = 159
    description_cut_threshold: int = 130

    export_filename: str = "metagenius_export.csv"
    log_level: str = "INFO"


settings = Settings()
