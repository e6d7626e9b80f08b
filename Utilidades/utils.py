import numpy as np
import matplotlib.pyplot as plt


def format_log(data_str, max_len=64):
    """
    Formata strings longas para log, truncando no meio para facilitar leitura.
    Útil para logar sequências de bits sem poluir o console.
    """
    if len(data_str) > max_len:
        return f"{data_str[:(max_len-3)//2]}...{data_str[-(max_len-3)//2:]}"
    return data_str


def waveform_points(waveform):
    """
    Expõe o sinal como sequência ordenada de pares (índice, nível), completa e na ordem original.

    Args:
        waveform (array-like): Amostras do sinal codificado.

    Returns:
        list[tuple[int, float]]: Um par por amostra.
    """
    return [(i, float(level)) for i, level in enumerate(waveform)]


def compress_steps(waveform, samples_per_bit):
    """
    Reduz os pontos de um sinal digital para plotagem em degraus (plt.step com where='post').
    Mantém apenas a primeira amostra e as amostras onde o nível muda, mais um ponto de fechamento.
    O eixo X sai em unidades de bit (índice / samples_per_bit).

    Args:
        waveform (array-like): Amostras do sinal codificado.
        samples_per_bit (int): Amostras por bit (tamanho da célula).

    Returns:
        tuple[np.ndarray, np.ndarray]: Posições em bits (eixo X) e níveis correspondentes.
    """
    signal = np.asarray(waveform, dtype=float)
    if signal.size == 0:
        return np.zeros(0), np.zeros(0)

    keep = np.ones(signal.size, dtype=bool)
    keep[1:] = signal[1:] != signal[:-1]
    indices = np.flatnonzero(keep)

    # Ponto final estende o último degrau até o fim do sinal.
    x = np.append(indices, signal.size) / samples_per_bit
    y = np.append(signal[indices], signal[-1])
    return x, y


def plot_signal(time_or_x, signal, title, xlabel="Tempo (s)", ylabel="Amplitude (V)", is_digital=False, show=True,
                overlay=None):
    """
    Plota um sinal (digital ou analógico) para análise de transmissão/recepção.
    Usado para o sinal em banda base (codificação de linha) e para o sinal analógico de origem (PCM/DM).

    Args:
        time_or_x (array-like): Eixo X (tempo ou índice de amostra).
        signal (array-like): Valores do sinal a serem plotados.
        title (str): Título do gráfico.
        xlabel (str, opcional): Rótulo do eixo X.
        ylabel (str, opcional): Rótulo do eixo Y.
        is_digital (bool, opcional): True para sinais digitais (usa degraus), False para analógicos (linha contínua).
        show (bool, opcional): Exibe a janela; False apenas devolve a figura.
        overlay (tuple, opcional): (x, y, rótulo) de um segundo sinal desenhado por cima, como os degraus do PCM
            sobre a senoide de referência.

    Returns:
        matplotlib.figure.Figure: Figura criada.
    """
    fig = plt.figure(figsize=(15, 4))
    if is_digital:
        # Sinais digitais: degraus (NRZ, Manchester, AMI etc.)
        plt.step(time_or_x, signal, where='post')
    else:
        # Sinais analógicos: linha contínua (senoide de referência, PCM quantizado).
        plt.plot(time_or_x, signal)

    if overlay is not None:
        overlay_x, overlay_y, label = overlay
        plt.plot(overlay_x, overlay_y, color='tab:orange', label=label)
        plt.legend()

    plt.title(title, fontsize=14)
    plt.xlabel(xlabel, fontsize=12)
    plt.ylabel(ylabel, fontsize=12)
    plt.grid(True)

    # Ajuste dinâmico do eixo Y para melhor visualização, com margem.
    if len(signal):
        min_val = np.min(signal)
        max_val = np.max(signal)
        plt.ylim(min_val - abs(min_val)*0.2 - 0.2, max_val + abs(max_val)*0.2 + 0.2)

    plt.tight_layout()
    if show:
        plt.show()
    return fig
