## Application settings configuration

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "dev"
    log_level: str = "INFO"

    session_absolute_days: int = 7
    session_idle_minutes: int = 60
    # Upper bound on live in-memory sessions; least recently seen are evicted first
    max_sessions: int = 10000
    # Unknown emails sign in as a demo user instead of being rejected
    demo_login_enabled: bool = True

    # Ollama settings
    ollama_base_url: str = "http://localhost:11434/v1"
    ollama_model: str = "llama3.1"

    # Production settings
    LLM_PROVIDER: str = "ollama"
    GROQ_API_KEY: str = ""
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    llm_timeout_seconds: float = 120.0
    llm_max_attempts: int = 3

    roadmap_months: int = 6
    resume_max_bytes: int = 5 * 1024 * 1024


settings = Settings()
