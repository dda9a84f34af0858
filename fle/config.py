import os
import json
import base64
import binascii
from typing import Mapping, Optional

from dotenv import load_dotenv

from fle.options.datakey import DataKeyOptionsBuilder, data_key

load_dotenv()

# Variáveis de ambiente
LOG_LEVEL = os.getenv('FLE_LOG_LEVEL', 'INFO')
SIEM_ENDPOINT = os.getenv('FLE_SIEM_ENDPOINT')
KMS_PROVIDER = os.getenv('FLE_KMS_PROVIDER', 'local')

MASTER_KEY_VAR = 'DATAKEY_MASTER_KEY'
KEY_ALT_NAMES_VAR = 'DATAKEY_KEY_ALT_NAMES'
KEY_MATERIAL_VAR = 'DATAKEY_KEY_MATERIAL'


class ConfigError(ValueError):
    """Configuração inválida da data key nas variáveis de ambiente."""


def _parse_master_key(raw: str) -> dict:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{MASTER_KEY_VAR} não é um JSON válido: {e}") from e
    if not isinstance(value, dict):
        raise ConfigError(f"{MASTER_KEY_VAR} deve ser um objeto JSON")
    return value


def _parse_key_alt_names(raw: str) -> list:
    return [name.strip() for name in raw.split(',') if name.strip()]


def _parse_key_material(raw: str) -> bytes:
    try:
        return base64.b64decode(raw.strip(), validate=True)
    except binascii.Error as e:
        raise ConfigError(f"{KEY_MATERIAL_VAR} não é base64 válido: {e}") from e


def datakey_builder_from_env(environ: Optional[Mapping[str, str]] = None) -> DataKeyOptionsBuilder:
    """
    Monta um DataKeyOptionsBuilder a partir das variáveis de ambiente.

    Args:
        environ (Mapping): Variáveis a usar. Padrão: os.environ.

    Returns:
        DataKeyOptionsBuilder: Um setter por variável presente.

    Raises:
        ConfigError: JSON ou base64 inválido.
    """
    env = os.environ if environ is None else environ
    builder = data_key()

    if MASTER_KEY_VAR in env:
        builder.set_master_key(_parse_master_key(env[MASTER_KEY_VAR]))
    if KEY_ALT_NAMES_VAR in env:
        builder.set_key_alt_names(_parse_key_alt_names(env[KEY_ALT_NAMES_VAR]))
    if KEY_MATERIAL_VAR in env:
        builder.set_key_material(_parse_key_material(env[KEY_MATERIAL_VAR]))

    return builder
