# CamadaFisica/esquemas.py

from enum import Enum

from CamadaFisica.erros import UnsupportedSchemeError


class Scheme(str, Enum):
    """Esquemas de codificação de linha suportados pela Camada Física."""

    NRZ_L = "NRZ-L"
    NRZ_I = "NRZ-I"
    MANCHESTER = "Manchester"
    DIFF_MANCHESTER = "Differential Manchester"
    AMI = "AMI"
    AMI_B8ZS = "AMI-B8ZS"
    AMI_HDB3 = "AMI-HDB3"

    @classmethod
    def parse(cls, value):
        """
        Converte o identificador recebido da interface (membro ou nome exibido) no esquema.
        Lança UnsupportedSchemeError para qualquer valor fora da enumeração.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = ALIASES.get(value, value)
            for scheme in cls:
                if scheme.value == name:
                    return scheme
        raise UnsupportedSchemeError(f"Tipo de codificação desconhecido: {value}")

    @classmethod
    def names(cls):
        return [scheme.value for scheme in cls]

    @property
    def is_scrambled(self):
        return self in (Scheme.AMI_B8ZS, Scheme.AMI_HDB3)

    def __str__(self):
        return self.value


ALIASES = {
    "DiffManchester": Scheme.DIFF_MANCHESTER.value,
}
