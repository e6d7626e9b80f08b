# CamadaFisica/codificacao_linha.py

import logging

import numpy as np

from CamadaFisica.configuracao import (
    B8ZS_RUN,
    HDB3_RUN,
    HIGH,
    INITIAL_LEVEL,
    INITIAL_POLARITY,
    LOW,
    ZERO,
    get_samples_per_bit,
    validate_samples_per_bit,
)
from CamadaFisica.erros import InvalidInputError
from CamadaFisica.esquemas import Scheme

logger = logging.getLogger(__name__)

# Posições (em bits) dos pulsos inseridos no bloco B8ZS "000VB0VB".
B8ZS_POS_V1, B8ZS_POS_B1, B8ZS_POS_V2, B8ZS_POS_B2 = 3, 4, 6, 7


def normalize_bits(bits):
    """
    Valida e normaliza a sequência de bits para uma string de '0'/'1'.
    Aceita string ou iterável de inteiros (0/1), como chega da camada de enlace ou do front-end analógico.
    """
    if bits is None:
        raise InvalidInputError("Sequência de bits ausente (None).")
    if isinstance(bits, str):
        normalized = bits
    else:
        try:
            normalized = "".join(str(b) for b in bits)
        except TypeError:
            raise InvalidInputError(f"Sequência de bits não iterável: {bits!r}") from None
    invalid = set(normalized) - {"0", "1"}
    if invalid:
        raise InvalidInputError(f"Símbolos não binários na sequência de bits: {sorted(invalid)}")
    return normalized


def _set_cell(signal, bit_index, level, samples_per_bit):
    start = bit_index * samples_per_bit
    signal[start:start + samples_per_bit] = level


class LineEncoder:
    """Implementa esquemas de codificação de linha (modulação em banda base) com embaralhamento B8ZS/HDB3.
    Atua na Camada Física, convertendo bits digitais em níveis discretos de sinal (HIGH, LOW, ZERO).

    Cada bit gera exatamente samples_per_bit amostras (uma "célula"), de modo que
    len(sinal) == len(bits) * samples_per_bit para todos os esquemas.
    Todo estado (último nível, última polaridade, contadores) é local à chamada.
    """

    def __init__(self):
        self._handlers = {
            Scheme.NRZ_L: self.nrz_l,
            Scheme.NRZ_I: self.nrz_i,
            Scheme.MANCHESTER: self.manchester,
            Scheme.DIFF_MANCHESTER: self.differential_manchester,
            Scheme.AMI: self.ami,
            Scheme.AMI_B8ZS: self.ami_b8zs,
            Scheme.AMI_HDB3: self.ami_hdb3,
        }

    def encode(self, bits, encoding_type, samples_per_bit=None):
        """
        Interface para selecionar e aplicar um método específico de codificação de linha.

        Parâmetros:
        - bits: sequência binária a ser codificada (string ou iterável de 0/1).
        - encoding_type: esquema (Scheme ou nome exibido, ex: "AMI-HDB3").
        - samples_per_bit: amostras por bit; se omitido usa a configuração do processo.
        """
        if samples_per_bit is None:
            samples_per_bit = get_samples_per_bit()
        else:
            validate_samples_per_bit(samples_per_bit)
        scheme = Scheme.parse(encoding_type)
        bits = normalize_bits(bits)

        signal = self._handlers[scheme](bits, samples_per_bit)
        logger.debug(f"encode: esquema={scheme.value} bits={len(bits)} amostras={len(signal)}")
        return signal

    def _allocate(self, bits, samples_per_bit):
        return np.full(len(bits) * samples_per_bit, ZERO, dtype=float)

    def nrz_l(self, bits, samples_per_bit):
        """
        NRZ-L (Non-Return to Zero Level):
        - Bit '1': nível HIGH durante toda a célula
        - Bit '0': nível LOW durante toda a célula
        """
        signal = self._allocate(bits, samples_per_bit)
        for i, bit in enumerate(bits):
            _set_cell(signal, i, HIGH if bit == "1" else LOW, samples_per_bit)
        return signal

    def nrz_i(self, bits, samples_per_bit):
        """
        NRZ-I (Non-Return to Zero Inverted):
        A informação está na transição, não no nível absoluto.
        - Bit '1': inverte o nível antes de emitir a célula
        - Bit '0': mantém o nível anterior
        O nível inicial é LOW por convenção.
        """
        signal = self._allocate(bits, samples_per_bit)
        level = INITIAL_LEVEL
        for i, bit in enumerate(bits):
            if bit == "1":
                level = -level
            _set_cell(signal, i, level, samples_per_bit)
        return signal

    def manchester(self, bits, samples_per_bit):
        """
        Manchester (convenção IEEE 802.3):
        - Bit '1': primeira metade LOW, segunda metade HIGH (transição de subida)
        - Bit '0': primeira metade HIGH, segunda metade LOW (transição de descida)
        """
        half = samples_per_bit // 2
        signal = self._allocate(bits, samples_per_bit)
        for i, bit in enumerate(bits):
            start = i * samples_per_bit
            first, second = (LOW, HIGH) if bit == "1" else (HIGH, LOW)
            signal[start:start + half] = first
            signal[start + half:start + samples_per_bit] = second
        return signal

    def differential_manchester(self, bits, samples_per_bit):
        """
        Manchester Diferencial:
        - Bit '0': transição no início da célula
        - Bit '1': sem transição no início
        A transição no meio da célula é obrigatória para todo bit (recuperação de relógio).
        """
        half = samples_per_bit // 2
        signal = self._allocate(bits, samples_per_bit)
        level = INITIAL_LEVEL
        for i, bit in enumerate(bits):
            start = i * samples_per_bit
            if bit == "0":
                level = -level
            signal[start:start + half] = level
            level = -level
            signal[start + half:start + samples_per_bit] = level
        return signal

    def ami(self, bits, samples_per_bit):
        """
        Bipolar AMI (Alternate Mark Inversion):
        - Bit '0': nível zero (ausência de pulso)
        - Bit '1': alterna a polaridade do pulso (+1 e -1) a cada ocorrência
        """
        signal = self._allocate(bits, samples_per_bit)
        last_polarity = INITIAL_POLARITY  # Inicializa para que o primeiro pulso seja positivo
        for i, bit in enumerate(bits):
            if bit == "1":
                last_polarity = -last_polarity
                _set_cell(signal, i, float(last_polarity), samples_per_bit)
        return signal

    def ami_b8zs(self, bits, samples_per_bit):
        """
        AMI com B8ZS (Bipolar 8-Zero Substitution):
        Oito zeros consecutivos são substituídos pelo bloco "000VB0VB", sobrescrevendo
        as oito células já emitidas. Com P a polaridade do último pulso real:
        V1 = P (violação), B1 = -P, V2 = B1 (violação), B2 = -V2.
        Garante transições periódicas sem alterar a informação após o desembaralhamento.
        """
        signal = self._allocate(bits, samples_per_bit)
        last_polarity = INITIAL_POLARITY
        zero_count = 0
        substitutions = 0

        for i, bit in enumerate(bits):
            if bit == "1":
                zero_count = 0
                last_polarity = -last_polarity
                _set_cell(signal, i, float(last_polarity), samples_per_bit)
                continue

            zero_count += 1  # A célula já está em ZERO no buffer pré-alocado
            if zero_count == B8ZS_RUN:
                block_start = i - B8ZS_RUN + 1
                v1 = last_polarity
                b1 = -v1
                v2 = b1
                b2 = -v2
                _set_cell(signal, block_start + B8ZS_POS_V1, float(v1), samples_per_bit)
                _set_cell(signal, block_start + B8ZS_POS_B1, float(b1), samples_per_bit)
                _set_cell(signal, block_start + B8ZS_POS_V2, float(v2), samples_per_bit)
                _set_cell(signal, block_start + B8ZS_POS_B2, float(b2), samples_per_bit)
                last_polarity = b2
                zero_count = 0
                substitutions += 1

        logger.debug(f"ami_b8zs: {substitutions} substituição(ões) 000VB0VB aplicada(s)")
        return signal

    def ami_hdb3(self, bits, samples_per_bit):
        """
        AMI com HDB3 (High Density Bipolar 3):
        Quatro zeros consecutivos são substituídos conforme a paridade dos pulsos
        reais emitidos desde a última substituição:
        - Par: "B00V" (B = inverso do último pulso, V = B, violando a alternância)
        - Ímpar: "000V" (V = mesma polaridade do último pulso)
        Após a substituição a última polaridade passa a ser a de V e ambos os contadores zeram.
        """
        signal = self._allocate(bits, samples_per_bit)
        last_polarity = INITIAL_POLARITY
        zero_count = 0
        pulses_since_substitution = 0
        substitutions = 0

        for i, bit in enumerate(bits):
            if bit == "1":
                zero_count = 0
                last_polarity = -last_polarity
                _set_cell(signal, i, float(last_polarity), samples_per_bit)
                pulses_since_substitution += 1
                continue

            zero_count += 1
            if zero_count == HDB3_RUN:
                block_start = i - HDB3_RUN + 1
                if pulses_since_substitution % 2 == 0:
                    b = -last_polarity
                    v = b
                    _set_cell(signal, block_start, float(b), samples_per_bit)
                else:
                    v = last_polarity
                _set_cell(signal, block_start + HDB3_RUN - 1, float(v), samples_per_bit)
                last_polarity = v
                zero_count = 0
                pulses_since_substitution = 0
                substitutions += 1

        logger.debug(f"ami_hdb3: {substitutions} substituição(ões) B00V/000V aplicada(s)")
        return signal


def encode(bits, scheme, samples_per_bit=None):
    """Atalho funcional: codifica bits com um LineEncoder novo (sem estado compartilhado)."""
    return LineEncoder().encode(bits, scheme, samples_per_bit)

