"""
Validação e normalização de dados de cadastro (e-mail, telefone, CPF/CNPJ, CEP, UF).

Campos opcionais vazios são considerados válidos; a obrigatoriedade é
responsabilidade de quem chama (serializers e casos de uso).
"""
import re
from typing import Optional, Tuple

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TELEFONE_REGEX = re.compile(r"^[\d\s()+-]+$")
CPF_REGEX = re.compile(r"^\d{11}$")
CNPJ_REGEX = re.compile(r"^\d{14}$")
CEP_REGEX = re.compile(r"^\d{5}-?\d{3}$")
UF_REGEX = re.compile(r"^[A-Z]{2}$")

# Limites de comprimento das colunas
MAX_NOME = 255
MAX_ENDERECO = 255
MAX_CIDADE = 100
MAX_CEP = 20
MAX_TELEFONE = 30
MAX_DOCUMENTO = 20


def somente_digitos(valor: Optional[str]) -> str:
    return re.sub(r"\D", "", valor or "")


def normalizar_email(email) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def normalizar_texto_opcional(valor) -> Optional[str]:
    """Retorna o texto sem espaços nas pontas, ou None se vazio / não-texto."""
    if not isinstance(valor, str):
        return None
    valor = valor.strip()
    return valor or None


def email_valido(email) -> bool:
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_REGEX.match(email.strip()))


def telefone_valido(telefone: Optional[str]) -> bool:
    if not telefone:
        return True
    digitos = somente_digitos(telefone)
    return 10 <= len(digitos) <= 15 and bool(TELEFONE_REGEX.match(telefone))


def documento_valido(documento: Optional[str]) -> bool:
    """Aceita CPF (11 dígitos) ou CNPJ (14 dígitos), com ou sem máscara."""
    if not documento:
        return True
    digitos = somente_digitos(documento)
    return bool(CPF_REGEX.match(digitos) or CNPJ_REGEX.match(digitos))


def cep_valido(cep: Optional[str]) -> bool:
    if not cep:
        return True
    return bool(CEP_REGEX.match(cep.strip()))


def uf_valida(uf: Optional[str]) -> bool:
    if not uf:
        return True
    return bool(UF_REGEX.match(uf.strip().upper()))


def validar_tamanho_maximo(valor: Optional[str], maximo: int, nome_campo: str) -> Tuple[bool, Optional[str]]:
    if not valor:
        return True, None
    if len(valor) > maximo:
        return False, f"{nome_campo} deve ter no máximo {maximo} caracteres."
    return True, None


def formatar_cep(cep: str) -> str:
    """00000000 -> 00000-000"""
    digitos = somente_digitos(cep)
    return re.sub(r"^(\d{5})(\d{3})$", r"\1-\2", digitos)


def formatar_telefone(telefone: str) -> str:
    digitos = somente_digitos(telefone)
    if len(digitos) == 11:
        return re.sub(r"(\d{2})(\d{5})(\d{4})", r"(\1) \2-\3", digitos)
    if len(digitos) == 10:
        return re.sub(r"(\d{2})(\d{4})(\d{4})", r"(\1) \2-\3", digitos)
    return telefone
