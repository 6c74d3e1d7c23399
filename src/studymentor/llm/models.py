from pydantic import BaseModel, ConfigDict, Field


class GenerationConfig(BaseModel):
    """Fixed sampling parameters sent with every mentor request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    top_k: int = Field(default=40, ge=1, description="Top-k sampling cutoff")
    top_p: float = Field(default=0.95, gt=0.0, le=1.0, description="Nucleus sampling cutoff")
    max_output_tokens: int = Field(default=800, ge=1, description="Cap on generated tokens")


DEFAULT_GENERATION_CONFIG = GenerationConfig()
