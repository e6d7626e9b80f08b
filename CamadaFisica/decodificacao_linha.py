# CamadaFisica/decodificacao_linha.py

import logging
import numbers

import numpy as np

from CamadaFisica.configuracao import (
    B8ZS_RUN,
    FIRST_BIT_DEFAULT,
    HDB3_RUN,
    INITIAL_POLARITY,
    MIN_THRESHOLD,
    THRESHOLD_RATIO,
)
from CamadaFisica.erros import UnsupportedSchemeError
from CamadaFisica.esquemas import Scheme

logger = logging.getLogger(__name__)

# Resultados degradados: a decodificação é "melhor esforço" e não lança exceções.
EMPTY_WAVEFORM = "(Empty waveform)"
INVALID_SAMPLES_PER_BIT = "(Invalid samplesPerBit)"
UNSUPPORTED_DECODING = "(Unsupported decoding)"

# Esquemas que decidem por metades de célula: exigem ao menos 2 amostras por bit.
HALF_CELL_SCHEMES = (Scheme.MANCHESTER, Scheme.DIFF_MANCHESTER)


def magnitude_threshold(waveform):
    """Limiar de decisão por amplitude, relativo ao maior nível absoluto do sinal recebido."""
    waveform = np.asarray(waveform, dtype=float)
    max_abs = float(np.max(np.abs(waveform))) if waveform.size else 0.0
    return max(MIN_THRESHOLD, max_abs * THRESHOLD_RATIO)


def cell_means(waveform, samples_per_bit, start=0, stop=None):
    """
    Média de cada célula (ou de uma fatia [start, stop) dentro da célula).
    Amostras finais que não completam uma célula são descartadas.
    """
    waveform = np.asarray(waveform, dtype=float)
    num_cells = len(waveform) // samples_per_bit
    cells = waveform[:num_cells * samples_per_bit].reshape(num_cells, samples_per_bit)
    return cells[:, start:stop].mean(axis=1) if num_cells else np.zeros(0)


def _sign(value, threshold):
    """Sinal com zona morta: médias dentro do limiar são ambíguas (0)."""
    if value > threshold:
        return 1
    if value < -threshold:
        return -1
    return 0


def _last_pulse_sign(reference, means, start, stop, threshold):
    # Atualiza a polaridade de referência com o último pulso em [start, stop).
    for k in range(stop - 1, start - 1, -1):
        sign = _sign(means[k], threshold)
        if sign != 0:
            return sign
    return reference


class LineDecoder:
    """Decodificadores robustos de codificação de linha e desembaralhadores B8ZS/HDB3.
    Cada decisão é tomada sobre a média da célula, comparada com um limiar calculado
    uma vez por chamada, o que tolera sinais escalados, quantizados ou com pequeno ruído.
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

    def decode(self, waveform, encoding_type, samples_per_bit):
        """
        Recupera a sequência de bits a partir do sinal amostrado.

        Parâmetros:
        - waveform: amostras recebidas (lista, tupla ou array numpy).
        - encoding_type: esquema (Scheme ou nome exibido).
        - samples_per_bit: amostras por bit usadas na transmissão.

        Retorna a string de bits, ou uma string sentinela descritiva para sinal vazio,
        samples_per_bit inválido ou esquema não suportado.
        """
        if waveform is None or len(waveform) == 0:
            logger.warning("decode: sinal vazio recebido")
            return EMPTY_WAVEFORM
        if (isinstance(samples_per_bit, bool) or not isinstance(samples_per_bit, numbers.Integral)
                or samples_per_bit <= 0):
            logger.warning(f"decode: samples_per_bit inválido ({samples_per_bit!r})")
            return INVALID_SAMPLES_PER_BIT
        try:
            scheme = Scheme.parse(encoding_type)
        except UnsupportedSchemeError:
            logger.warning(f"decode: esquema não suportado ({encoding_type})")
            return UNSUPPORTED_DECODING
        if scheme in HALF_CELL_SCHEMES and samples_per_bit < 2:
            logger.warning(f"decode: {scheme.value} exige ao menos 2 amostras por bit ({samples_per_bit})")
            return INVALID_SAMPLES_PER_BIT
        samples_per_bit = int(samples_per_bit)

        waveform = np.asarray(waveform, dtype=float)
        threshold = magnitude_threshold(waveform)
        logger.debug(f"decode: esquema={scheme.value} amostras={len(waveform)} limiar={threshold:.4f}")
        return self._handlers[scheme](waveform, samples_per_bit, threshold)

    def nrz_l(self, waveform, samples_per_bit, threshold):
        """Média positiva -> '1'; negativa ou ambígua -> '0' (convenção conservadora)."""
        means = cell_means(waveform, samples_per_bit)
        return "".join("1" if _sign(m, threshold) > 0 else "0" for m in means)

    def nrz_i(self, waveform, samples_per_bit, threshold):
        """
        O primeiro bit é indecidível sem nível de referência anterior e sai como FIRST_BIT_DEFAULT.
        Os seguintes são '1' se o sinal da célula difere da referência, '0' caso contrário.
        """
        means = cell_means(waveform, samples_per_bit)
        if not len(means):
            return ""
        bits = [FIRST_BIT_DEFAULT]
        reference = _sign(means[0], threshold)
        for m in means[1:]:
            current = _sign(m, threshold)
            bits.append("1" if current != 0 and reference != 0 and current != reference else "0")
            if current != 0:
                reference = current
        return "".join(bits)

    def manchester(self, waveform, samples_per_bit, threshold):
        """
        Compara as médias das duas metades: subida (primeira menor) -> '1', descida -> '0'.
        Metades quase iguais recorrem ao sinal da célula inteira.
        """
        half = max(1, samples_per_bit // 2)
        first = cell_means(waveform, samples_per_bit, 0, half)
        second = cell_means(waveform, samples_per_bit, half)
        whole = cell_means(waveform, samples_per_bit)
        bits = []
        for a, b, m in zip(first, second, whole):
            if abs(a - b) <= threshold:
                bits.append("1" if _sign(m, threshold) > 0 else "0")
            else:
                bits.append("1" if a < b else "0")
        return "".join(bits)

    def differential_manchester(self, waveform, samples_per_bit, threshold):
        """
        Compara o início de cada célula com o fim da anterior:
        mesmo sinal (sem transição na fronteira) -> '1', transição -> '0'.
        """
        half = max(1, samples_per_bit // 2)
        first = cell_means(waveform, samples_per_bit, 0, half)
        second = cell_means(waveform, samples_per_bit, half)
        if not len(first):
            return ""
        bits = [FIRST_BIT_DEFAULT]
        for i in range(1, len(first)):
            no_transition = _sign(first[i], threshold) == _sign(second[i - 1], threshold)
            bits.append("1" if no_transition else "0")
        return "".join(bits)

    def ami(self, waveform, samples_per_bit, threshold):
        """Pulso de qualquer polaridade acima do limiar -> '1'; nível zero -> '0'."""
        means = cell_means(waveform, samples_per_bit)
        return "".join("1" if abs(m) > threshold else "0" for m in means)

    def ami_b8zs(self, waveform, samples_per_bit, threshold):
        preliminary = self.ami(waveform, samples_per_bit, threshold)
        return self.unscramble_b8zs(preliminary, waveform, samples_per_bit, threshold)

    def ami_hdb3(self, waveform, samples_per_bit, threshold):
        preliminary = self.ami(waveform, samples_per_bit, threshold)
        return self.unscramble_hdb3(preliminary, waveform, samples_per_bit, threshold)

    def unscramble_b8zs(self, preliminary_bits, waveform, samples_per_bit, threshold):
        """
        Desfaz substituições B8ZS. Uma janela de 8 células casa quando as células 0,1,2,5
        são zero e 3,4,6,7 são pulsos; a confirmação exige a assinatura de polaridade
        R, -R, -R, R nas células 3,4,6,7, onde R é a polaridade do último pulso antes da janela
        (INITIAL_POLARITY se não houver). A varredura é gulosa e não sobrepõe janelas.
        """
        if not preliminary_bits:
            return preliminary_bits
        means = cell_means(waveform, samples_per_bit)
        bits = list(preliminary_bits)
        n = min(len(bits), len(means))
        reference = INITIAL_POLARITY
        reverted = 0

        b = 0
        while b + B8ZS_RUN <= n:
            window = preliminary_bits[b:b + B8ZS_RUN]
            if window[:3] == "000" and window[5] == "0" and window[3:5] == "11" and window[6:] == "11":
                signs = [_sign(means[b + k], threshold) for k in (3, 4, 6, 7)]
                if signs == [reference, -reference, -reference, reference]:
                    bits[b:b + B8ZS_RUN] = "0" * B8ZS_RUN
                    reference = _last_pulse_sign(reference, means, b, b + B8ZS_RUN, threshold)
                    b += B8ZS_RUN
                    reverted += 1
                    continue
            reference = _last_pulse_sign(reference, means, b, b + 1, threshold)
            b += 1

        logger.debug(f"unscramble_b8zs: {reverted} bloco(s) 000VB0VB revertido(s)")
        return "".join(bits)

    def unscramble_hdb3(self, preliminary_bits, waveform, samples_per_bit, threshold):
        """
        Desfaz substituições HDB3 com janela de 4 células:
        - "000V": células 0-2 zero, célula 3 pulso com a mesma polaridade da referência (violação);
        - "B00V": célula 0 pulso oposto à referência, células 1-2 zero, célula 3 com a polaridade de B.
        """
        if not preliminary_bits:
            return preliminary_bits
        means = cell_means(waveform, samples_per_bit)
        bits = list(preliminary_bits)
        n = min(len(bits), len(means))
        reference = INITIAL_POLARITY
        reverted = 0

        b = 0
        while b + HDB3_RUN <= n:
            window = preliminary_bits[b:b + HDB3_RUN]
            s0 = _sign(means[b], threshold)
            s3 = _sign(means[b + 3], threshold)
            matched = False
            if window == "0001":
                matched = s3 == reference
            elif window == "1001":
                matched = s0 == -reference and s3 == s0
            if matched:
                bits[b:b + HDB3_RUN] = "0" * HDB3_RUN
                reference = s3
                b += HDB3_RUN
                reverted += 1
                continue
            reference = _last_pulse_sign(reference, means, b, b + 1, threshold)
            b += 1

        logger.debug(f"unscramble_hdb3: {reverted} bloco(s) B00V/000V revertido(s)")
        return "".join(bits)


def decode(waveform, scheme, samples_per_bit):
    """Atalho funcional: decodifica com um LineDecoder novo (sem estado compartilhado)."""
    return LineDecoder().decode(waveform, scheme, samples_per_bit)
