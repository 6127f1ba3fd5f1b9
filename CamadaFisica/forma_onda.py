# CamadaFisica/forma_onda.py

import dataclasses
import logging
from typing import NamedTuple

from CamadaFisica.modulacoes_digitais import LineCodingScheme

logger = logging.getLogger(__name__)

DT = 1.0  # Duração de um bit (unidade de tempo do gráfico)
DEFAULT_DATA_FILE = "signal.dat"
DEFAULT_IMAGE_FILE = "signal.png"
IMAGE_WIDTH = 800
IMAGE_HEIGHT = 300

# Faixa do eixo Y por esquema: fixa, não depende dos dados.
UNIPOLAR_Y_RANGE = (-0.5, 1.5)
BIPOLAR_Y_RANGE = (-1.5, 1.5)


class SamplePoint(NamedTuple):
    time: float
    voltage: float


@dataclasses.dataclass(frozen=True)
class RenderConfig:
    """Descritor de renderização consumido pelo gnuplot (ou pelo plot em matplotlib)."""

    y_min: float
    y_max: float
    data_file: str = DEFAULT_DATA_FILE
    image_file: str = DEFAULT_IMAGE_FILE
    title: str = ""
    x_label: str = "Time"
    y_label: str = "Voltage"
    series_title: str = "Signal"
    style: str = "lines"
    width: int = IMAGE_WIDTH
    height: int = IMAGE_HEIGHT
    grid: bool = True

    @property
    def y_range(self):
        return (self.y_min, self.y_max)


def expand(levels, manchester, dt=DT):
    """
    Converte a sequência de níveis em pontos (tempo, tensão) de uma função degrau.

    - Modo normal: cada nível ocupa um intervalo dt. Emite o início e o fim do patamar e,
      se o próximo nível existir e for diferente, um ponto extra no mesmo instante com o
      novo nível (a aresta vertical da transição).
    - Modo Manchester: cada par de níveis (as duas metades de um bit) ocupa um intervalo dt,
      com a transição obrigatória em dt/2.

    Os tempos são não decrescentes; pontos consecutivos com o mesmo tempo representam uma
    aresta vertical.
    """
    levels = [float(level) for level in levels]
    points = []
    t = 0.0

    if manchester:
        if len(levels) % 2 != 0:
            logger.error(f"expand: sequência Manchester com tamanho ímpar ({len(levels)})")
            raise ValueError("Sequência Manchester deve ter tamanho par.")
        half = dt / 2.0
        for k in range(0, len(levels), 2):
            first, second = levels[k], levels[k + 1]
            points.append(SamplePoint(t, first))
            points.append(SamplePoint(t + half, first))
            points.append(SamplePoint(t + half, second))
            points.append(SamplePoint(t + dt, second))
            t += dt
    else:
        for i, level in enumerate(levels):
            points.append(SamplePoint(t, level))
            points.append(SamplePoint(t + dt, level))
            if i + 1 < len(levels) and levels[i + 1] != level:
                points.append(SamplePoint(t + dt, levels[i + 1]))
            t += dt

    logger.debug(f"expand: {len(levels)} níveis -> {len(points)} pontos (manchester={manchester})")
    return points


def final_time(points):
    """Instante do último ponto (0.0 para forma de onda vazia)."""
    return points[-1].time if points else 0.0


def render_config(scheme, data_file=DEFAULT_DATA_FILE, image_file=DEFAULT_IMAGE_FILE):
    """Monta o descritor de renderização do esquema; valores fixos por esquema."""
    scheme = LineCodingScheme.from_selector(scheme)
    if scheme is LineCodingScheme.UNIPOLAR_NRZ:
        y_min, y_max = UNIPOLAR_Y_RANGE
    else:
        y_min, y_max = BIPOLAR_Y_RANGE
    return RenderConfig(
        y_min=y_min,
        y_max=y_max,
        data_file=str(data_file),
        image_file=str(image_file),
        title=scheme.display_name,
    )


def render_script(config):
    """Gera o script gnuplot que desenha o arquivo de dados descrito em config."""
    lines = [
        f"set terminal png size {config.width},{config.height}",
        f"set output '{config.image_file}'",
        f"set xlabel '{config.x_label}'",
        f"set ylabel '{config.y_label}'",
        f"set yrange [{config.y_min:g}:{config.y_max:g}]",
    ]
    if config.grid:
        lines.append("set grid")
    lines.append(f"plot '{config.data_file}' with {config.style} title '{config.series_title}'")
    return "\n".join(lines) + "\n"
