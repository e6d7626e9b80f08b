# CamadaFisica/test_modulacao_analogica.py

import unittest

import numpy as np

from CamadaFisica.erros import InvalidInputError
from CamadaFisica.modulacao_analogica import AnalogFrontEnd


class TestAnalogFrontEnd(unittest.TestCase):
    def setUp(self):
        # Quatro amostras de um período: 0, +A, ~0, -A
        self.front_end = AnalogFrontEnd(freq=1.0, amplitude=1.0, duration=1.0, samples=4)

    def test_pcm(self):
        # 2 bits -> 4 níveis em [-1, 1] com degrau 2/3: 0 -> 2, +1 -> 3, ~0 -> 2, -1 -> 0
        self.assertEqual(self.front_end.pcm(2), "10111000")

    def test_pcm_comprimento(self):
        front_end = AnalogFrontEnd(freq=3.0, amplitude=2.5, duration=0.5, samples=37)
        for n_bits in (1, 3, 8):
            self.assertEqual(len(front_end.pcm(n_bits)), 37 * n_bits)

    def test_pcm_quantized_wave(self):
        t, levels = self.front_end.pcm_quantized_wave(2)
        self.assertEqual(len(t), 8)
        np.testing.assert_array_almost_equal(t[:4], [0.0, 0.25, 0.25, 0.5])
        np.testing.assert_array_almost_equal(levels[:4], [1 / 3, 1 / 3, 1.0, 1.0])

    def test_delta_modulation(self):
        self.assertEqual(self.front_end.delta_modulation(), "1100")

    def test_delta_modulation_acompanha_subida(self):
        front_end = AnalogFrontEnd(freq=0.25, amplitude=1.0, duration=1.0, samples=16)
        bits = front_end.delta_modulation(step=0.05)
        self.assertEqual(len(bits), 16)
        self.assertEqual(bits[:4], "1111")

    def test_sine_wave(self):
        t, v = self.front_end.sine_wave(1)
        self.assertEqual(len(t), 2)
        t, v = self.front_end.sine_wave(5)
        np.testing.assert_array_almost_equal(v, [0, 1, 0, -1, 0])

    def test_parametros_invalidos(self):
        with self.assertRaises(InvalidInputError):
            AnalogFrontEnd(freq=1.0, amplitude=0.0, duration=1.0, samples=4)
        with self.assertRaises(InvalidInputError):
            AnalogFrontEnd(freq=1.0, amplitude=1.0, duration=-1.0, samples=4)
        with self.assertRaises(InvalidInputError):
            AnalogFrontEnd(freq=1.0, amplitude=1.0, duration=1.0, samples=0)
        with self.assertRaises(InvalidInputError):
            self.front_end.pcm(0)
        with self.assertRaises(InvalidInputError):
            self.front_end.delta_modulation(step=0)


if __name__ == '__main__':
    unittest.main()
