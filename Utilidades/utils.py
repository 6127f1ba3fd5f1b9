import contextlib
import logging
import os

import matplotlib.pyplot as plt

from CamadaFisica.modulacoes_digitais import is_one

logger = logging.getLogger(__name__)


class SinkUnavailableError(OSError):
    """Arquivo de dados da forma de onda não pôde ser aberto ou escrito."""


def text_to_binary(text):
    """
    Converte uma string de texto para uma sequência contínua de bits (ASCII 8 bits por caractere).
    Permite alimentar o codificador de linha com uma mensagem em vez de bits digitados.

    Args:
        text (str): Texto de entrada.

    Returns:
        str: String de bits concatenados (ex: "0100100001100101...").
    """
    return ''.join(format(ord(char), '08b') for char in text)


def normalize_bits(bits):
    """
    Normaliza a entrada para uma string de '0' e '1'.
    Qualquer símbolo diferente de '1' (ou do inteiro 1) vira '0', sem gerar erro.
    """
    return ''.join('1' if is_one(bit) else '0' for bit in bits)


def format_log(data_str, max_len=64):
    """
    Trunca strings longas no meio para facilitar visualização em logs.
    Útil para logar grandes sequências de bits de forma legível.
    """
    if len(data_str) > max_len:
        return f"{data_str[:(max_len-3)//2]}...{data_str[-(max_len-3)//2:]}"
    return data_str


def format_point(point):
    """Um registro do arquivo de dados: "<tempo> <tensão>" em notação decimal curta."""
    time, voltage = point
    return f"{time:g} {voltage:g}"


def write_waveform(points, path):
    """
    Grava os pontos (tempo, tensão) no arquivo de dados, um registro por linha,
    na ordem de emissão. Formato consumido pelo gnuplot.

    Raises:
        SinkUnavailableError: se o arquivo não puder ser aberto ou escrito.
    """
    opened = False
    count = 0
    try:
        with open(path, "w", encoding="utf-8") as out:
            opened = True
            for point in points:
                out.write(format_point(point) + "\n")
                count += 1
    except OSError as e:
        logger.error(f"Não foi possível abrir o arquivo: {path} ({e})")
        # Registros parciais não ficam no disco.
        if opened:
            with contextlib.suppress(OSError):
                os.remove(path)
        raise SinkUnavailableError(f"Não foi possível abrir o arquivo: {path}") from e
    logger.debug(f"write_waveform: {count} pontos gravados em {path}")
    return path


def plot_waveform(points, config, show=False):
    """
    Desenha a forma de onda em degraus a partir dos pontos já expandidos.
    Usa as mesmas definições do script gnuplot (faixa Y, rótulos, grade, tamanho 800x300).

    Args:
        points (list): Pontos (tempo, tensão) gerados por forma_onda.expand.
        config (RenderConfig): Descritor de renderização do esquema.
        show (bool, opcional): Abre a janela do matplotlib além de salvar a imagem.

    Returns:
        str: Caminho da imagem salva.
    """
    dpi = 100
    fig, ax = plt.subplots(figsize=(config.width / dpi, config.height / dpi), dpi=dpi)
    try:
        t = [p[0] for p in points]
        v = [p[1] for p in points]
        # Os pontos já trazem as arestas verticais; basta ligá-los com linhas.
        ax.plot(t, v, label=config.series_title, color='dodgerblue')
        if config.title:
            ax.set_title(config.title, fontsize=12)
        ax.set_xlabel(config.x_label)
        ax.set_ylabel(config.y_label)
        ax.set_ylim(config.y_min, config.y_max)
        ax.set_xlim(left=0, right=max(t) if len(t) > 0 else 1)
        if config.grid:
            ax.grid(True, linestyle='--', linewidth=0.5, alpha=0.8)
        ax.legend()
        fig.tight_layout()
        fig.savefig(config.image_file, dpi=dpi)
        logger.debug(f"plot_waveform: imagem salva em {config.image_file}")
        if show:
            plt.show()
    finally:
        plt.close(fig)
    return config.image_file
