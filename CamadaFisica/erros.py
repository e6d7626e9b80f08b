# CamadaFisica/erros.py


class LineCodingError(ValueError):
    """Erro base da Camada Física (codificação de linha e embaralhamento)."""


class ConfigurationError(LineCodingError):
    """Configuração fatal inválida, como amostras por bit ímpar ou menor que 2."""


class InvalidInputError(LineCodingError):
    """Entrada rejeitada antes de qualquer máquina de estados: bits não binários ou parâmetros não positivos."""


class UnsupportedSchemeError(LineCodingError):
    """Esquema de codificação desconhecido."""
