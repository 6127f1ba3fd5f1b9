# Simulador/main.py

import argparse
import logging
import sys

from Utilidades import utils
from Utilidades.utils import SinkUnavailableError
from CamadaFisica.modulacoes_digitais import InvalidSchemeError, LINE_CODERS
from CamadaFisica import forma_onda
from Simulador.transmissor import run_transmitter

# Reduz verbosidade de logs de bibliotecas externas para foco nos logs do visualizador.
logging.getLogger('matplotlib.font_manager').setLevel(logging.WARNING)
logging.getLogger('PIL.PngImagePlugin').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_SCHEME = 1
EXIT_SINK_UNAVAILABLE = 2


def scheme_menu():
    """Texto do menu de esquemas, na ordem dos seletores 1-4."""
    lines = ["Escolha o esquema de codificação:"]
    for scheme in LINE_CODERS:
        lines.append(f"{scheme.value}. {scheme.display_name}")
    return "\n".join(lines)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="line-coding-visualizer",
        description="Gera a forma de onda de uma codificação de linha e o script gnuplot para desenhá-la",
        epilog=scheme_menu(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "bits",
        nargs="?",
        help="Sequência binária (qualquer caractere diferente de '1' vale '0'); perguntada se omitida",
    )
    parser.add_argument(
        "-s", "--scheme",
        help="Seletor do esquema (1-4) ou nome; perguntado se omitido",
    )
    parser.add_argument(
        "--text",
        help="Mensagem ASCII convertida em bits (8 por caractere) no lugar de BITS",
    )
    parser.add_argument(
        "--data-file",
        default=forma_onda.DEFAULT_DATA_FILE,
        help=f"Arquivo de dados (tempo tensão) (default: {forma_onda.DEFAULT_DATA_FILE})",
    )
    parser.add_argument(
        "--image-file",
        default=forma_onda.DEFAULT_IMAGE_FILE,
        help=f"Imagem referenciada pelo script (default: {forma_onda.DEFAULT_IMAGE_FILE})",
    )
    parser.add_argument(
        "--script-file",
        help="Também salva o script gnuplot neste arquivo",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Desenha a imagem diretamente com matplotlib",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Nível de log (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(asctime)s - %(levelname)s - %(message)s')

    if args.text is not None:
        bits = utils.text_to_binary(args.text)
    elif args.bits is not None:
        bits = args.bits
    else:
        bits = input("Digite os dados binários: ").strip()

    scheme = args.scheme
    if scheme is None:
        print(scheme_menu())
        scheme = input("Sua escolha: ").strip()

    params = {
        "bits": bits,
        "scheme": scheme,
        "data_file": args.data_file,
        "image_file": args.image_file,
        "script_file": args.script_file,
        "render": args.render,
    }
    try:
        result = run_transmitter(params)
    except InvalidSchemeError:
        print("Entrada inválida.")
        return EXIT_INVALID_SCHEME
    except SinkUnavailableError as e:
        print(f"Erro: {e}", file=sys.stderr)
        return EXIT_SINK_UNAVAILABLE

    print("\nGnuplot Script:")
    print(result['script'], end="")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
