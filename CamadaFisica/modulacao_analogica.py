# CamadaFisica/modulacao_analogica.py

import logging

import numpy as np

from CamadaFisica.erros import InvalidInputError

logger = logging.getLogger(__name__)


class AnalogFrontEnd:
    """
    Front-end analógico: amostra uma senoide de referência e a converte em bits por PCM ou
    Modulação Delta. A sequência de bits gerada alimenta a codificação de linha sem tratamento especial.
    """

    def __init__(self, freq, amplitude, duration, samples):
        """
        Inicializa os parâmetros da senoide de referência.

        - freq: Frequência do sinal analógico (Hz)
        - amplitude: Amplitude de pico (V)
        - duration: Duração observada (s)
        - samples: Quantidade de amostras no intervalo
        """
        if samples <= 0 or duration <= 0 or amplitude <= 0:
            raise InvalidInputError("Parâmetros analógicos inválidos: samples, duration e amplitude devem ser > 0")
        self.freq = freq
        self.amplitude = amplitude
        self.duration = duration
        self.samples = int(samples)
        self.sampling_rate = self.samples / duration

    def _sample_times(self):
        return np.arange(self.samples) / self.sampling_rate

    def _analog(self, t):
        return self.amplitude * np.sin(2 * np.pi * self.freq * t)

    def _quantize(self, values, n_bits):
        # Quantização uniforme em [-A, A] com 2^n níveis; índice limitado ao intervalo válido.
        levels = 1 << n_bits
        step = 2 * self.amplitude / (levels - 1)
        indices = np.floor((values + self.amplitude) / step + 0.5).astype(int)
        return np.clip(indices, 0, levels - 1), step

    def sine_wave(self, num_points=200):
        """Senoide contínua de referência para visualização (pelo menos 2 pontos)."""
        num_points = max(2, int(num_points))
        t = np.linspace(0, self.duration, num_points)
        return t, self._analog(t)

    def pcm(self, n_bits):
        """
        PCM (Pulse Code Modulation):
        Cada amostra é quantizada em 2^n_bits níveis e escrita em n_bits bits (MSB primeiro).
        Retorna uma string com samples * n_bits bits.
        """
        if n_bits <= 0:
            raise InvalidInputError(f"Quantidade de bits PCM deve ser > 0, recebeu {n_bits}")
        indices, _ = self._quantize(self._analog(self._sample_times()), n_bits)
        bits = "".join(format(int(idx), f"0{n_bits}b") for idx in indices)
        logger.debug(f"pcm: {self.samples} amostras x {n_bits} bits -> {len(bits)} bits")
        return bits

    def pcm_quantized_wave(self, n_bits):
        """
        Representação em degraus do sinal quantizado (dois pontos por amostra), usada para plotagem.
        """
        if n_bits <= 0:
            raise InvalidInputError(f"Quantidade de bits PCM deve ser > 0, recebeu {n_bits}")
        t = self._sample_times()
        indices, step = self._quantize(self._analog(t), n_bits)
        quantized = -self.amplitude + indices * step
        t_steps = np.column_stack([t, t + 1 / self.sampling_rate]).ravel()
        return t_steps, np.repeat(quantized, 2)

    def delta_modulation(self, step=None):
        """
        Modulação Delta:
        - '1' quando a amostra está acima (ou igual) da estimativa, que sobe um degrau
        - '0' caso contrário, e a estimativa desce um degrau
        A estimativa fica limitada a [-A, A]. Degrau padrão: A/16.
        """
        if step is None:
            step = self.amplitude / 16.0
        if step <= 0:
            raise InvalidInputError(f"Degrau da modulação delta deve ser > 0, recebeu {step}")

        estimate = 0.0
        bits = []
        for value in self._analog(self._sample_times()):
            if value >= estimate:
                bits.append("1")
                estimate += step
            else:
                bits.append("0")
                estimate -= step
            estimate = max(-self.amplitude, min(self.amplitude, estimate))
        logger.debug(f"delta_modulation: {len(bits)} bits com degrau {step:.4f}")
        return "".join(bits)
