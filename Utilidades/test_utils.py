# Utilidades/test_utils.py

import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from Utilidades import utils


class TestUtils(unittest.TestCase):
    def test_format_log(self):
        self.assertEqual(utils.format_log("0101"), "0101")
        truncado = utils.format_log("1" * 50 + "0" * 50, max_len=23)
        self.assertEqual(truncado, "1" * 10 + "..." + "0" * 10)

    def test_waveform_points(self):
        pontos = utils.waveform_points(np.array([1.0, 0.0, -1.0]))
        self.assertEqual(pontos, [(0, 1.0), (1, 0.0), (2, -1.0)])
        self.assertEqual(utils.waveform_points([]), [])

    def test_compress_steps(self):
        waveform = [1, 1, 1, 1, 0, 0, 0, 0, -1, -1, -1, -1]
        x, y = utils.compress_steps(waveform, 4)
        np.testing.assert_array_almost_equal(x, [0, 1, 2, 3])
        np.testing.assert_array_equal(y, [1, 0, -1, -1])

    def test_compress_steps_transicao_no_meio_da_celula(self):
        x, y = utils.compress_steps([-1, -1, 1, 1, 1, 1, -1, -1], 4)
        np.testing.assert_array_almost_equal(x, [0, 0.5, 1.5, 2])
        np.testing.assert_array_equal(y, [-1, 1, -1, -1])

    def test_compress_steps_vazio(self):
        x, y = utils.compress_steps([], 4)
        self.assertEqual(len(x), 0)
        self.assertEqual(len(y), 0)

    def test_plot_signal(self):
        x, y = utils.compress_steps([1, 1, 0, 0, -1, -1], 2)
        fig = utils.plot_signal(x, y, "AMI", is_digital=True, show=False)
        self.assertEqual(fig.axes[0].get_title(), "AMI")
        plt.close(fig)

        t = np.linspace(0, 1, 50)
        fig = utils.plot_signal(t, np.sin(2 * np.pi * t), "Senoide", show=False)
        self.assertEqual(len(fig.axes[0].lines), 1)
        plt.close(fig)

    def test_plot_signal_sobreposto(self):
        t = np.linspace(0, 1, 50)
        fig = utils.plot_signal(t, np.sin(2 * np.pi * t), "PCM", show=False,
                                overlay=([0, 0.5, 1], [-1, 1, 1], "Quantizado"))
        self.assertEqual(len(fig.axes[0].lines), 2)
        self.assertEqual(fig.axes[0].get_legend().get_texts()[0].get_text(), "Quantizado")
        plt.close(fig)


if __name__ == '__main__':
    unittest.main()
