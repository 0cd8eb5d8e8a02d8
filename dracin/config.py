"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe DRACIN_,
et peut optionnellement être fournie via un fichier .env.

Les URLs des fournisseurs amont sont la seule configuration métier : elles sont
figées dans une ProviderTable immuable passée à la passerelle à sa construction.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dracin.core.value_objects.provider import ApiFlavor, ProviderConfig, ProviderTable
from dracin.utils.constants import DEFAULT_UPSTREAM_BASE_URL, USER_AGENT

# Trouver le fichier .env à la racine du projet (parent de dracin/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

PRIMARY_PROVIDER = "primary"
SECONDARY_PROVIDER = "secondary"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe DRACIN_.
    Exemple : DRACIN_DEFAULT_PROVIDER=secondary

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="DRACIN_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Fournisseurs amont
    primary_base_url: str = Field(default=DEFAULT_UPSTREAM_BASE_URL)
    secondary_base_url: str = Field(default=DEFAULT_UPSTREAM_BASE_URL)
    default_provider: str = Field(default=PRIMARY_PROVIDER)

    # Appels sortants (un seul essai, délai borné)
    user_agent: str = Field(default=USER_AGENT)
    request_timeout: float = Field(default=15.0, gt=0)
    page_size: int = Field(default=20, ge=1, le=100)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/dracin.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("default_provider")
    @classmethod
    def check_provider(cls, v: str) -> str:
        """Le fournisseur par défaut doit exister dans la table."""
        v = v.strip().lower()
        if v not in (PRIMARY_PROVIDER, SECONDARY_PROVIDER):
            raise ValueError(f"Fournisseur inconnu: {v!r} (attendu: primary, secondary)")
        return v

    @field_validator("primary_base_url", "secondary_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Retire la barre finale des URLs de base."""
        return v.strip().rstrip("/")

    @property
    def provider_table(self) -> ProviderTable:
        """Table immuable des fournisseurs construite depuis la configuration."""
        return ProviderTable.from_configs(
            [
                ProviderConfig(PRIMARY_PROVIDER, self.primary_base_url, ApiFlavor.DOWNLOAD),
                ProviderConfig(SECONDARY_PROVIDER, self.secondary_base_url, ApiFlavor.ACTION),
            ],
            default=self.default_provider,
        )
