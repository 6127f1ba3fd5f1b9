# Simulador/transmissor.py

import logging
import os

from Utilidades import utils
from Utilidades.utils import format_log
from CamadaFisica.modulacoes_digitais import DigitalEncoder, InvalidSchemeError, LineCodingScheme
from CamadaFisica import forma_onda

logger = logging.getLogger(__name__)


def _no_callback(update_dict):
    pass


def run_transmitter(params):
    """
    Fluxo principal: resolve o esquema, codifica os bits, expande os níveis em pontos
    (tempo, tensão), grava o arquivo de dados e monta o descritor de renderização.
    Cada etapa é reportada via callback para quem estiver acompanhando (console ou GUI).

    Args:
        params (dict): 'bits' e 'scheme' obrigatórios; opcionais 'data_file', 'image_file',
                       'script_file', 'render' (salva PNG via matplotlib) e 'gui_callback'.

    Returns:
        dict: 'scheme', 'levels', 'points', 'config' e 'script' da execução.

    Raises:
        InvalidSchemeError: esquema fora de {1, 2, 3, 4}; nada é codificado nem gravado.
        SinkUnavailableError: arquivo de dados, script ou imagem indisponível; a codificação já
                              concluída não é afetada.
    """
    update_callback = params.get('gui_callback') or _no_callback

    config = {
        "bits": params.get("bits", ""),
        "scheme": params.get("scheme"),
        "data_file": params.get("data_file", forma_onda.DEFAULT_DATA_FILE),
        "image_file": params.get("image_file", forma_onda.DEFAULT_IMAGE_FILE),
        "script_file": params.get("script_file"),
        "render": params.get("render", False),
    }

    # --- Seleção do esquema: falha aqui encerra a execução antes de qualquer codificação ---
    try:
        scheme = LineCodingScheme.from_selector(config["scheme"])
    except InvalidSchemeError:
        logger.error(f"Esquema de codificação inválido: {config['scheme']!r}")
        update_callback({'type': 'status', 'message': "Entrada inválida.", 'color': 'red'})
        raise

    bits = config["bits"]
    logger.info(f"1. Bits de entrada ({len(bits)}): {format_log(utils.normalize_bits(bits))}")
    update_callback({'type': 'log', 'message': f"1. Esquema selecionado: {scheme.display_name}"})

    # --- Codificação de linha: instância nova por execução (estado AMI nunca é compartilhado) ---
    levels = DigitalEncoder().encode(bits, scheme)
    logger.info(f"2. Codificação {scheme.display_name}: {len(levels)} níveis")
    update_callback({'type': 'log', 'message': f"2. Codificação aplicada: {len(levels)} níveis."})

    # --- Expansão em degraus ---
    points = forma_onda.expand(levels, scheme.is_manchester)
    logger.info(f"3. Forma de onda: {len(points)} pontos até t={forma_onda.final_time(points):g}")
    update_callback({'type': 'plot_digital', 'data': {'points': points, 'scheme': scheme}})

    # --- Arquivo de dados ---
    utils.write_waveform(points, config["data_file"])
    logger.info(f"4. Arquivo de dados gravado: {config['data_file']}")
    update_callback({'type': 'log', 'message': f"4. Dados gravados em {config['data_file']}."})

    # --- Descritor de renderização ---
    render_config = forma_onda.render_config(scheme, config["data_file"], config["image_file"])
    script = forma_onda.render_script(render_config)
    if config["script_file"]:
        try:
            with open(config["script_file"], "w", encoding="utf-8") as out:
                out.write(script)
        except OSError as e:
            logger.error(f"Não foi possível gravar o script: {config['script_file']} ({e})")
            raise utils.SinkUnavailableError(f"Não foi possível gravar o script: {config['script_file']}") from e
        logger.info(f"5. Script gnuplot salvo em {config['script_file']}")
    if config["render"]:
        try:
            image = utils.plot_waveform(points, render_config)
        except OSError as e:
            logger.error(f"Não foi possível gerar a imagem: {config['image_file']} ({e})")
            raise utils.SinkUnavailableError(f"Não foi possível gerar a imagem: {config['image_file']}") from e
        logger.info(f"5. Imagem gerada: {os.path.abspath(image)}")
        update_callback({'type': 'log', 'message': f"5. Imagem gerada em {image}."})

    update_callback({'type': 'status', 'message': 'Codificação concluída!', 'color': 'green'})
    return {
        'scheme': scheme,
        'levels': levels,
        'points': points,
        'config': render_config,
        'script': script,
    }
