# Simulador/test_main.py

import unittest
from unittest import mock

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from CamadaFisica.erros import ConfigurationError, InvalidInputError
from CamadaFisica.esquemas import Scheme
from Simulador.main import DEMO_BITS, SimuladorCodificacao, main, plotar_pcm


class TestSimuladorCodificacao(unittest.TestCase):
    def setUp(self):
        self.simulador = SimuladorCodificacao(samples_per_bit=4)

    def test_simular_todos_os_esquemas(self):
        for scheme in Scheme:
            resultado = self.simulador.simular(DEMO_BITS, scheme)
            self.assertIsNone(resultado["error"])
            self.assertTrue(resultado["length_ok"])
            self.assertTrue(resultado["match"], scheme.value)
            self.assertEqual(len(resultado["waveform"]), len(DEMO_BITS) * 4)

    def test_simular_primeiro_bit_ambiguo(self):
        resultado = self.simulador.simular("1101", "NRZ-I")
        self.assertEqual(resultado["decoded"], "0101")
        self.assertTrue(resultado["match"])

    def test_simular_registra_erros(self):
        resultado = self.simulador.simular("1021", "AMI")
        self.assertFalse(resultado["match"])
        self.assertIn("não binários", resultado["error"])

        resultado = self.simulador.simular("101", "Pseudoternary")
        self.assertFalse(resultado["match"])
        self.assertIsNotNone(resultado["error"])

    def test_simular_analogico(self):
        resultado = self.simulador.simular_analogico("PCM", 2.0, 1.0, 1.0, 16, Scheme.AMI_B8ZS, n_bits=4)
        self.assertEqual(len(resultado["bits"]), 64)
        self.assertTrue(resultado["match"])

        resultado = self.simulador.simular_analogico("DM", 1.0, 1.0, 1.0, 32, "Manchester")
        self.assertEqual(len(resultado["bits"]), 32)
        self.assertTrue(resultado["match"])

        with self.assertRaises(InvalidInputError):
            self.simulador.simular_analogico("FM", 1.0, 1.0, 1.0, 8, "AMI")

    def test_configuracao_invalida(self):
        with self.assertRaises(ConfigurationError):
            SimuladorCodificacao(samples_per_bit=3)

    def test_main(self):
        self.assertEqual(main([]), 0)

    def test_main_com_plot(self):
        with mock.patch("Utilidades.utils.plt.show") as show:
            self.assertEqual(main(["--plot"]), 0)
        # Um gráfico por esquema, um para a sequência PCM codificada e um para a senoide com o PCM.
        self.assertEqual(show.call_count, len(Scheme.names()) + 2)
        plt.close("all")

    def test_plotar_pcm(self):
        fig = plotar_pcm(1.0, 1.0, 1.0, 4, n_bits=2, show=False)
        linhas = fig.axes[0].get_lines()
        self.assertEqual(len(linhas), 2)
        # Degraus nos níveis quantizados de [-1, 1] com 4 níveis.
        niveis = set(np.round(linhas[1].get_ydata(), 6))
        self.assertTrue(niveis <= {-1.0, round(-1 / 3, 6), round(1 / 3, 6), 1.0})
        plt.close(fig)


if __name__ == '__main__':
    unittest.main()
