"""Camada Física: codificação de linha, embaralhamento B8ZS/HDB3 e front-end analógico."""

from CamadaFisica.codificacao_linha import LineEncoder, encode
from CamadaFisica.decodificacao_linha import (
    EMPTY_WAVEFORM,
    INVALID_SAMPLES_PER_BIT,
    UNSUPPORTED_DECODING,
    LineDecoder,
    decode,
)
from CamadaFisica.erros import ConfigurationError, InvalidInputError, LineCodingError, UnsupportedSchemeError
from CamadaFisica.esquemas import Scheme
from CamadaFisica.modulacao_analogica import AnalogFrontEnd
