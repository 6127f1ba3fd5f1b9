# CamadaFisica/modulacoes_digitais.py

import abc
import enum
import logging

import numpy as np

logger = logging.getLogger(__name__)


class InvalidSchemeError(ValueError):
    """Seletor de codificação fora de {1, 2, 3, 4} (ou nome desconhecido)."""


class LineCodingScheme(enum.IntEnum):
    """Esquemas de codificação de linha suportados.
    O valor inteiro é o mesmo seletor apresentado no menu da linha de comando.
    """

    UNIPOLAR_NRZ = 1
    POLAR_NRZ_L = 2
    BIPOLAR_AMI = 3
    MANCHESTER = 4

    @property
    def display_name(self):
        return _DISPLAY_NAMES[self]

    @property
    def is_manchester(self):
        """Manchester gera dois níveis por bit e usa expansão em meio-bit."""
        return self is LineCodingScheme.MANCHESTER

    @classmethod
    def from_selector(cls, value):
        """
        Resolve um seletor para o esquema correspondente.

        Aceita o próprio enum, o inteiro do menu (1-4), uma string numérica
        ("3") ou o nome de exibição ("Bipolar AMI", sem diferenciar maiúsculas).
        Qualquer outro valor gera InvalidSchemeError.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for scheme, name in _DISPLAY_NAMES.items():
                if text.lower() == name.lower():
                    return scheme
            try:
                value = int(text)
            except ValueError:
                raise InvalidSchemeError(f"Tipo de codificação desconhecido: {value!r}") from None
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidSchemeError(f"Tipo de codificação desconhecido: {value!r}")
        try:
            return cls(int(value))
        except ValueError:
            raise InvalidSchemeError(f"Tipo de codificação desconhecido: {value!r}") from None


_DISPLAY_NAMES = {
    LineCodingScheme.UNIPOLAR_NRZ: "Unipolar NRZ",
    LineCodingScheme.POLAR_NRZ_L: "Polar NRZ-L",
    LineCodingScheme.BIPOLAR_AMI: "Bipolar AMI",
    LineCodingScheme.MANCHESTER: "Manchester",
}


def is_one(bit):
    """Somente '1' (ou o inteiro 1) conta como bit um; todo o resto é zero."""
    return bit == '1' or (isinstance(bit, (int, np.integer)) and not isinstance(bit, bool) and bit == 1)


class LineEncoder(abc.ABC):
    """Interface comum dos codificadores de linha (Camada Física, banda base).
    Cada subclasse converte uma sequência de bits em níveis de tensão.
    """

    scheme = None

    def encode(self, bits):
        """Codifica a sequência completa e devolve um array de níveis (float)."""
        self.reset()
        signal = []
        for bit in bits:
            signal.extend(self.encode_bit(is_one(bit)))
        logger.debug(f"{type(self).__name__}: {len(signal)} níveis gerados")
        return np.array(signal, dtype=float)

    @abc.abstractmethod
    def encode_bit(self, one):
        """Níveis (um ou dois) que representam um bit."""

    def reset(self):
        """Codificadores sem estado não têm nada a reiniciar."""


class UnipolarNRZEncoder(LineEncoder):
    """
    Unipolar NRZ:
    - Bit '1': nível +1 durante todo o bit
    - Bit '0': nível 0 (ausência de tensão)
    """

    scheme = LineCodingScheme.UNIPOLAR_NRZ

    def encode_bit(self, one):
        return (1.0,) if one else (0.0,)


class PolarNRZLEncoder(LineEncoder):
    """
    Polar NRZ-L (Non-Return to Zero Level):
    - Bit '1': nível positivo constante (+1)
    - Bit '0': nível negativo constante (-1)

    O nível permanece constante durante toda a duração do bit, sem autossincronização.
    """

    scheme = LineCodingScheme.POLAR_NRZ_L

    def encode_bit(self, one):
        return (1.0,) if one else (-1.0,)


class BipolarAMIEncoder(LineEncoder):
    """
    Bipolar AMI (Alternate Mark Inversion):
    - Bit '0': nível zero (ausência de pulso)
    - Bit '1': pulso com polaridade alternada (+1, -1, +1, ...) a cada ocorrência

    A polaridade do próximo pulso é o único estado entre símbolos. Ela volta a +1
    no início de cada chamada a encode(), então duas codificações independentes
    nunca compartilham polaridade.
    """

    scheme = LineCodingScheme.BIPOLAR_AMI

    def __init__(self):
        self.next_pulse_polarity = 1.0

    def reset(self):
        self.next_pulse_polarity = 1.0

    def encode_bit(self, one):
        if not one:
            return (0.0,)
        level = self.next_pulse_polarity
        self.next_pulse_polarity = -level
        return (level,)


class ManchesterEncoder(LineEncoder):
    """
    Codificação Manchester:
    Cada bit é dividido em duas metades:
    - Bit '1': primeira metade positiva (+1), segunda metade negativa (-1)
    - Bit '0': primeira metade negativa (-1), segunda metade positiva (+1)

    A transição no meio do bit carrega o relógio junto com o dado; a saída tem o dobro
    do tamanho da entrada.
    """

    scheme = LineCodingScheme.MANCHESTER

    def encode_bit(self, one):
        return (1.0, -1.0) if one else (-1.0, 1.0)


# Mapeamento esquema -> classe do codificador, usado pela fábrica e pela CLI.
LINE_CODERS = {
    LineCodingScheme.UNIPOLAR_NRZ: UnipolarNRZEncoder,
    LineCodingScheme.POLAR_NRZ_L: PolarNRZLEncoder,
    LineCodingScheme.BIPOLAR_AMI: BipolarAMIEncoder,
    LineCodingScheme.MANCHESTER: ManchesterEncoder,
}


def create_encoder(scheme):
    """Devolve sempre uma instância nova do codificador do esquema pedido."""
    scheme = LineCodingScheme.from_selector(scheme)
    return LINE_CODERS[scheme]()


class DigitalEncoder:
    """Implementa esquemas de codificação de linha (modulação em banda base).
    Atua na Camada Física, convertendo bits digitais em níveis de tensão.
    """

    def encode(self, bits, encoding_type):
        """
        Interface para selecionar e aplicar um método específico de codificação de linha.

        Parâmetros:
        - bits: sequência binária a ser codificada (qualquer caractere diferente de '1' vale '0').
        - encoding_type: esquema (LineCodingScheme, seletor 1-4 ou nome de exibição).
        """
        try:
            encoder = create_encoder(encoding_type)
        except InvalidSchemeError:
            logger.error(f"encode: tipo de codificação desconhecido: {encoding_type!r}")
            raise
        return encoder.encode(bits)
