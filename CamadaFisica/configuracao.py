# CamadaFisica/configuracao.py

import numbers
import os

from CamadaFisica.erros import ConfigurationError

# Níveis discretos do sinal em banda base (V).
HIGH = 1.0
LOW = -1.0
ZERO = 0.0

# Amostras por bit padrão (deve ser par e >= 2 para permitir divisão em metades).
DEFAULT_SAMPLES_PER_BIT = 4
SAMPLES_PER_BIT_ENV = "CODIFICACAO_SAMPLES_PER_BIT"

# Limiar de decisão: max(MIN_THRESHOLD, max|amostra| * THRESHOLD_RATIO).
MIN_THRESHOLD = 0.05
THRESHOLD_RATIO = 0.25

# Convenções de estado inicial compartilhadas por codificador e decodificador.
INITIAL_LEVEL = LOW        # NRZ-I e Manchester Diferencial
INITIAL_POLARITY = -1      # Família AMI: o primeiro pulso sai positivo
FIRST_BIT_DEFAULT = "0"    # Primeiro bit indecidível (NRZ-I, Manchester Diferencial)

# Tamanho das sequências de zeros substituídas pelo embaralhamento.
B8ZS_RUN = 8
HDB3_RUN = 4


def validate_samples_per_bit(samples_per_bit):
    """
    Garante que cada bit ocupe uma quantidade par (>= 2) de amostras.
    Sem isso Manchester e Manchester Diferencial não têm metades simétricas.
    """
    if isinstance(samples_per_bit, bool) or not isinstance(samples_per_bit, numbers.Integral):
        raise ConfigurationError(f"samples_per_bit deve ser inteiro, recebeu {samples_per_bit!r}")
    if samples_per_bit < 2 or samples_per_bit % 2 != 0:
        raise ConfigurationError(f"samples_per_bit deve ser par e >= 2. Atual: {samples_per_bit}")
    return int(samples_per_bit)


def get_samples_per_bit():
    """
    Lê a quantidade de amostras por bit configurada para o processo.
    A variável de ambiente CODIFICACAO_SAMPLES_PER_BIT sobrepõe o padrão.
    """
    raw = os.environ.get(SAMPLES_PER_BIT_ENV)
    if raw is None:
        return validate_samples_per_bit(DEFAULT_SAMPLES_PER_BIT)
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{SAMPLES_PER_BIT_ENV} inválido: {raw!r}") from None
    return validate_samples_per_bit(value)
