# irondistribuidora/core/testes_catalogo.py

import unittest
from datetime import date, datetime
from decimal import Decimal

from irondistribuidora.core.catalogo import (
    filtrar_produtos,
    calcular_relevancia,
    ordenar_produtos,
    paginar_produtos,
    calcular_total_paginas,
    intervalo_paginas,
    consultar_catalogo,
    formatar_preco,
    formatar_data_reposicao,
    ORDENACAO_RELEVANCIA,
    ORDENACAO_PRECO_ASC,
    ORDENACAO_PRECO_DESC,
)
from irondistribuidora.core.entities import Produto, FiltrosProduto
from irondistribuidora.core.exceptions import DadosInvalidosError, DataInvalidaError


def produto(nome, marca='Samsung', categoria='display', preco='10.00', em_estoque=True,
            popularidade=None, codigo=None, modelo='a10'):
    return Produto(
        codigo=codigo or nome.upper().replace(' ', '-'),
        nome=nome,
        marca=marca,
        categoria=categoria,
        modelo=modelo,
        preco=Decimal(preco),
        em_estoque=em_estoque,
        popularidade=popularidade,
    )


class TestFiltros(unittest.TestCase):

    def setUp(self):
        self.produtos = [
            produto('Display A10', marca='Samsung', categoria='display'),
            produto('Bateria G8', marca='Motorola', categoria='battery', em_estoque=False, modelo='g8'),
            produto('Tampa Redmi 9', marca='Xiaomi', categoria='back_cover', codigo='TMP-RDM9', modelo='redmi 9'),
        ]

    def test_sem_filtros_retorna_tudo(self):
        self.assertEqual(len(filtrar_produtos(self.produtos, FiltrosProduto())), 3)

    def test_filtros_combinados_com_e(self):
        filtros = FiltrosProduto(marcas=['Samsung', 'Motorola'], somente_em_estoque=True)
        self.assertEqual([p.nome for p in filtrar_produtos(self.produtos, filtros)], ['Display A10'])

    def test_busca_em_nome_codigo_e_modelo(self):
        self.assertEqual(len(filtrar_produtos(self.produtos, FiltrosProduto(busca='  tmp-rdm '))), 1)
        self.assertEqual(len(filtrar_produtos(self.produtos, FiltrosProduto(busca='G8'))), 1)
        self.assertEqual(filtrar_produtos(self.produtos, FiltrosProduto(busca='iphone')), [])

    def test_filtro_por_categoria(self):
        resultado = filtrar_produtos(self.produtos, FiltrosProduto(categorias=['battery', 'back_cover']))
        self.assertEqual({p.categoria for p in resultado}, {'battery', 'back_cover'})


class TestOrdenacao(unittest.TestCase):

    def test_estoque_domina_popularidade(self):
        fora = produto('Zeta', em_estoque=False, popularidade=100)
        dentro = produto('Alfa', em_estoque=True, popularidade=0)
        self.assertGreater(calcular_relevancia(dentro), calcular_relevancia(fora))
        self.assertEqual(ordenar_produtos([fora, dentro], ORDENACAO_RELEVANCIA), [dentro, fora])

    def test_valores_exatos_de_relevancia(self):
        self.assertEqual(calcular_relevancia(produto('X', em_estoque=True, popularidade=0)), 10000)
        self.assertEqual(calcular_relevancia(produto('Y', em_estoque=False, popularidade=80)), 80)
        self.assertEqual(calcular_relevancia(produto('Z', em_estoque=True, popularidade=35)), 10035)

    def test_desempate_alfabetico_e_sem_estoque_por_ultimo(self):
        itens = [
            produto('C Produto', em_estoque=False, popularidade=90),
            produto('B Produto', em_estoque=True, popularidade=50),
            produto('A Produto', em_estoque=True, popularidade=50),
        ]
        self.assertEqual([p.nome for p in ordenar_produtos(itens, ORDENACAO_RELEVANCIA)],
                         ['A Produto', 'B Produto', 'C Produto'])

    def test_popularidade_ausente_vale_50(self):
        self.assertEqual(calcular_relevancia(produto('X', em_estoque=False)), 50)

    def test_empate_por_nome_alfabetico(self):
        itens = [produto('Órion'), produto('bateria'), produto('Ameixa')]
        self.assertEqual([p.nome for p in ordenar_produtos(itens, ORDENACAO_RELEVANCIA)],
                         ['Ameixa', 'bateria', 'Órion'])

    def test_ordenacao_por_preco(self):
        itens = [produto('A', preco='30'), produto('B', preco='10'), produto('C', preco='20')]
        self.assertEqual([p.nome for p in ordenar_produtos(itens, ORDENACAO_PRECO_ASC)], ['B', 'C', 'A'])
        self.assertEqual([p.nome for p in ordenar_produtos(itens, ORDENACAO_PRECO_DESC)], ['A', 'C', 'B'])


class TestPaginacao(unittest.TestCase):

    def setUp(self):
        self.produtos = [produto(f'P{i:03d}') for i in range(125)]

    def test_fatias(self):
        self.assertEqual(len(paginar_produtos(self.produtos, 1, 60)), 60)
        self.assertEqual(len(paginar_produtos(self.produtos, 3, 60)), 5)
        self.assertEqual(paginar_produtos(self.produtos, 4, 60), [])
        self.assertEqual(paginar_produtos(self.produtos, 0, 60), [])

    def test_total_paginas(self):
        self.assertEqual(calcular_total_paginas(125, 60), 3)
        self.assertEqual(calcular_total_paginas(120, 60), 2)
        self.assertEqual(calcular_total_paginas(0, 60), 0)
        with self.assertRaises(DadosInvalidosError):
            calcular_total_paginas(10, 0)

    def test_intervalo_de_paginas(self):
        self.assertEqual(intervalo_paginas(1, 3), [1, 2, 3])
        self.assertEqual(intervalo_paginas(1, 10), [1, 2, 3, 4, 5])
        self.assertEqual(intervalo_paginas(6, 10), [4, 5, 6, 7, 8])
        self.assertEqual(intervalo_paginas(10, 10), [6, 7, 8, 9, 10])
        self.assertEqual(intervalo_paginas(1, 0), [])

    def test_pipeline_completo(self):
        pagina = consultar_catalogo(self.produtos, FiltrosProduto(), ORDENACAO_RELEVANCIA, 2, 60)
        self.assertEqual(pagina.total_produtos, 125)
        self.assertEqual(pagina.total_paginas, 3)
        self.assertEqual(pagina.produtos_paginados[0].nome, 'P060')
        self.assertTrue(pagina.tem_proxima)


class TestFormatacao(unittest.TestCase):

    def test_preco_em_reais(self):
        self.assertEqual(formatar_preco(Decimal('1234.5')), 'R$ 1.234,50')
        self.assertEqual(formatar_preco(9), 'R$ 9,00')

    def test_data_de_reposicao(self):
        self.assertEqual(formatar_data_reposicao(date(2024, 3, 5)), '05/03/2024')
        self.assertEqual(formatar_data_reposicao(datetime(2024, 12, 31, 23, 0)), '31/12/2024')
        self.assertEqual(formatar_data_reposicao('2024-07-01'), '01/07/2024')

    def test_data_corrompida_levanta_erro(self):
        with self.assertRaises(DataInvalidaError):
            formatar_data_reposicao('amanhã')


if __name__ == '__main__':
    unittest.main()
