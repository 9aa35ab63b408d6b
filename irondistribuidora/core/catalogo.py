# irondistribuidora/core/catalogo.py
"""
Pipeline do catálogo: filtro -> ordenação -> paginação.

Funções puras sobre a lista completa de produtos já carregada pelo
repositório. Nenhuma função aqui acessa banco de dados.
"""
import math
import unicodedata
from datetime import date, datetime
from decimal import Decimal
from typing import List, Sequence

from irondistribuidora.core.entities import (
    Produto, FiltrosProduto, PaginaProdutos, POPULARIDADE_PADRAO
)
from irondistribuidora.core.exceptions import DadosInvalidosError, DataInvalidaError

BONUS_EM_ESTOQUE = 10000

ORDENACAO_RELEVANCIA = "relevance"
ORDENACAO_PRECO_ASC = "price_asc"
ORDENACAO_PRECO_DESC = "price_desc"
ORDENACOES = (ORDENACAO_RELEVANCIA, ORDENACAO_PRECO_ASC, ORDENACAO_PRECO_DESC)


# ====================================================================
# 1. FILTROS
# ====================================================================

def filtrar_produtos(produtos: Sequence[Produto], filtros: FiltrosProduto) -> List[Produto]:
    """Aplica marca, categoria, disponibilidade e busca textual (todos combinados com E)."""
    busca = (filtros.busca or "").strip().lower()

    def aceita(produto: Produto) -> bool:
        if filtros.marcas and produto.marca not in filtros.marcas:
            return False
        if filtros.categorias and produto.categoria not in filtros.categorias:
            return False
        if filtros.somente_em_estoque and not produto.em_estoque:
            return False
        if busca:
            texto = f"{produto.nome} {produto.codigo} {produto.modelo}".lower()
            if busca not in texto:
                return False
        return True

    return [produto for produto in produtos if aceita(produto)]


# ====================================================================
# 2. RELEVÂNCIA E ORDENAÇÃO
# ====================================================================

def calcular_relevancia(produto: Produto) -> int:
    """
    Score de relevância: estoque domina (10000 pontos), popularidade desempata.
    Um produto em estoque sempre supera um sem estoque, qualquer que seja a popularidade.
    """
    score = BONUS_EM_ESTOQUE if produto.em_estoque else 0
    popularidade = produto.popularidade if produto.popularidade is not None else POPULARIDADE_PADRAO
    return score + popularidade


def _chave_nome(nome: str):
    # Agrupa letras acentuadas junto da letra base (ordem do pt-BR), sem diferenciar maiúsculas.
    decomposto = unicodedata.normalize("NFD", nome)
    base = "".join(c for c in decomposto if not unicodedata.combining(c))
    return (base.casefold(), nome.casefold(), nome)


def ordenar_por_relevancia(produtos: Sequence[Produto]) -> List[Produto]:
    """Maior score primeiro; empate resolvido pelo nome em ordem alfabética."""
    return sorted(produtos, key=lambda p: (-calcular_relevancia(p), _chave_nome(p.nome)))


def ordenar_produtos(produtos: Sequence[Produto], ordenacao: str) -> List[Produto]:
    if ordenacao == ORDENACAO_PRECO_ASC:
        return sorted(produtos, key=lambda p: p.preco)
    if ordenacao == ORDENACAO_PRECO_DESC:
        return sorted(produtos, key=lambda p: p.preco, reverse=True)
    return ordenar_por_relevancia(produtos)


# ====================================================================
# 3. PAGINAÇÃO
# ====================================================================

def paginar_produtos(produtos: Sequence[Produto], pagina: int, itens_por_pagina: int) -> List[Produto]:
    """Fatia [(pagina-1)*n, pagina*n). Páginas fora do intervalo retornam lista vazia."""
    if pagina < 1:
        return []
    inicio = (pagina - 1) * itens_por_pagina
    return list(produtos[inicio:inicio + itens_por_pagina])


def calcular_total_paginas(total_itens: int, itens_por_pagina: int) -> int:
    if itens_por_pagina <= 0:
        raise DadosInvalidosError("A quantidade de itens por página deve ser positiva.")
    return math.ceil(total_itens / itens_por_pagina)


def intervalo_paginas(pagina_atual: int, total_paginas: int, max_visiveis: int = 5) -> List[int]:
    """
    Janela de números de página para exibição, centrada na página atual.

    Quando encosta no início ou no fim, a janela é deslocada para continuar
    com exatamente `max_visiveis` páginas.
    """
    if total_paginas <= max_visiveis:
        return list(range(1, total_paginas + 1))

    metade = max_visiveis // 2
    inicio = max(1, pagina_atual - metade)
    fim = min(total_paginas, inicio + max_visiveis - 1)

    if fim - inicio + 1 < max_visiveis:
        inicio = max(1, fim - max_visiveis + 1)

    return list(range(inicio, fim + 1))


def consultar_catalogo(
    produtos: Sequence[Produto],
    filtros: FiltrosProduto,
    ordenacao: str,
    pagina: int,
    itens_por_pagina: int,
) -> PaginaProdutos:
    """Executa o pipeline completo e devolve a página visível com os totais."""
    filtrados = filtrar_produtos(produtos, filtros)
    ordenados = ordenar_produtos(filtrados, ordenacao)
    return PaginaProdutos(
        produtos_paginados=paginar_produtos(ordenados, pagina, itens_por_pagina),
        total_produtos=len(ordenados),
        total_paginas=calcular_total_paginas(len(ordenados), itens_por_pagina),
        pagina=pagina,
        itens_por_pagina=itens_por_pagina,
    )


# ====================================================================
# 4. FORMATAÇÃO
# ====================================================================

def formatar_preco(valor) -> str:
    """Retorna o preço formatado em Real Brasileiro."""
    valor = Decimal(str(valor))
    return f"R$ {valor:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def formatar_data_reposicao(valor) -> str:
    """
    Formata a data de reposição como dd/mm/aaaa.

    Levanta DataInvalidaError se a data não puder ser interpretada; dado
    corrompido deve aparecer, não virar texto vazio.
    """
    if isinstance(valor, (datetime, date)):
        data = valor
    else:
        try:
            data = datetime.fromisoformat(str(valor).strip())
        except (TypeError, ValueError) as e:
            raise DataInvalidaError(valor) from e
    return data.strftime("%d/%m/%Y")
