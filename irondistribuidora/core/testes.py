# irondistribuidora/core/testes.py

import threading
import unittest
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

from irondistribuidora.core.use_cases import (
    ConsultarCatalogoUseCase,
    DetalharProdutoUseCase,
    CriarPedidoUseCase,
    CriarPedidoAdminUseCase,
    DetalharPedidoDoUsuarioUseCase,
    CancelarPedidoUseCase,
    GerenciarPedidosAdminUseCase,
    MAX_TENTATIVAS_NUMERACAO,
    proximo_numero_sequencial,
    gerar_numero_admin,
    incrementar_numero,
)
from irondistribuidora.core.entities import (
    Produto, Usuario, Endereco, ItemSolicitado, DadosCliente, FiltrosProduto,
)
from irondistribuidora.core.exceptions import (
    DadosInvalidosError,
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    UsuarioNaoEncontradoError,
    AcessoNegadoError,
    PersistenciaError,
    NumeroPedidoDuplicadoError,
    StatusInvalidoError,
    FormaPagamentoInvalidaError,
    CancelamentoNaoPermitidoError,
)
from irondistribuidora.infrastructure.memoria import (
    ProdutoRepositoryMemoria, PedidoRepositoryMemoria, UsuarioRepositoryMemoria,
)


def criar_produto(**campos):
    dados = dict(
        codigo='DSP-A10',
        nome='Display Galaxy A10',
        marca='Samsung',
        categoria='display',
        modelo='a10',
        preco=Decimal('120.00'),
        quantidade_estoque=10,
        em_estoque=True,
    )
    dados.update(campos)
    return Produto(**dados)


def criar_cliente():
    return DadosCliente(
        nome='  Loja do João ',
        email=' JOAO@Exemplo.com ',
        telefone='(48) 99999-0000',
        endereco_linha1='Rua das Flores, 10',
        cidade='Florianópolis',
        estado='sc',
        cep='88000-000',
    )


# ====================================================================
# NUMERAÇÃO
# ====================================================================

class TestNumeracaoPedido(unittest.TestCase):

    def test_primeiro_numero_e_1001(self):
        self.assertEqual(proximo_numero_sequencial(None), '1001')

    def test_sucessor_do_maior_numero(self):
        self.assertEqual(proximo_numero_sequencial('1099'), '1100')

    def test_numero_admin_usa_oito_ultimos_digitos_do_timestamp(self):
        agora = datetime.fromtimestamp(1700000123.456)
        numero = gerar_numero_admin(agora)
        self.assertTrue(numero.startswith('ADM-'))
        self.assertEqual(numero, 'ADM-' + str(int(agora.timestamp() * 1000))[-8:])

    def test_incrementar_preserva_prefixo_e_largura(self):
        self.assertEqual(incrementar_numero('1001'), '1002')
        self.assertEqual(incrementar_numero('ADM-00000099'), 'ADM-00000100')

    def test_incrementar_numero_invalido(self):
        with self.assertRaises(DadosInvalidosError):
            incrementar_numero('ADM-abc')


# ====================================================================
# CATÁLOGO
# ====================================================================

class TestConsultarCatalogo(unittest.TestCase):

    def setUp(self):
        produtos = [criar_produto(codigo=f'P{i:03d}', nome=f'Peça {i:03d}') for i in range(25)]
        self.repo = ProdutoRepositoryMemoria(produtos)
        self.use_case = ConsultarCatalogoUseCase(self.repo, itens_por_pagina=10)

    def test_pagina_e_totais(self):
        pagina = self.use_case.executar(pagina=3)
        self.assertEqual(pagina.total_produtos, 25)
        self.assertEqual(pagina.total_paginas, 3)
        self.assertEqual(len(pagina.produtos_paginados), 5)
        self.assertFalse(pagina.tem_proxima)
        self.assertTrue(pagina.tem_anterior)

    def test_pagina_fora_do_intervalo_e_ajustada(self):
        """Cenário: o filtro reduz o total e a página pedida deixa de existir."""
        pagina = self.use_case.executar(filtros=FiltrosProduto(busca='Peça 00'), pagina=7)
        self.assertEqual(pagina.total_paginas, 1)
        self.assertEqual(pagina.pagina, 1)
        self.assertEqual(len(pagina.produtos_paginados), 10)

    def test_sem_resultados(self):
        pagina = self.use_case.executar(filtros=FiltrosProduto(marcas=['LG']))
        self.assertEqual(pagina.total_produtos, 0)
        self.assertEqual(pagina.total_paginas, 0)
        self.assertEqual(pagina.produtos_paginados, [])

    def test_itens_por_pagina_informado_na_chamada(self):
        pagina = self.use_case.executar(itens_por_pagina=20)
        self.assertEqual(pagina.itens_por_pagina, 20)
        self.assertEqual(pagina.total_paginas, 2)

    def test_detalhar_produto_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            DetalharProdutoUseCase(self.repo).executar('nao-existe')


# ====================================================================
# CRIAÇÃO DE PEDIDO (CLIENTE)
# ====================================================================

class TestCriarPedido(unittest.TestCase):

    def setUp(self):
        self.display = criar_produto(preco=Decimal('120.00'), quantidade_estoque=5)
        self.bateria = criar_produto(
            codigo='BAT-G8', nome='Bateria Moto G8', marca='Motorola', categoria='battery',
            modelo='g8', preco=Decimal('45.50'), quantidade_estoque=2,
        )
        self.produto_repo = ProdutoRepositoryMemoria([self.display, self.bateria])
        self.pedido_repo = PedidoRepositoryMemoria()
        self.use_case = CriarPedidoUseCase(self.produto_repo, self.pedido_repo)

    def test_criar_pedido_com_sucesso(self):
        """
        Cenário: pedido válido recebe o número 1001 e o total vem dos preços do catálogo.
        """
        resultado = self.use_case.executar(
            usuario_id='user-1',
            itens=[ItemSolicitado(self.display.id, 2), ItemSolicitado(self.bateria.id, 1)],
            cliente=criar_cliente(),
            observacoes='  entregar à tarde ',
        )

        self.assertTrue(resultado.sucesso)
        self.assertEqual(resultado.numero_pedido, '1001')
        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.total, Decimal('285.50'))
        self.assertEqual(pedido.status, 'PENDING')
        self.assertEqual(pedido.forma_pagamento, 'PIX')
        self.assertEqual(pedido.observacoes, 'entregar à tarde')
        self.assertTrue(pedido.mensagem_whatsapp_enviada)
        # Snapshot normalizado
        self.assertEqual(pedido.cliente.nome, 'Loja do João')
        self.assertEqual(pedido.cliente.email, 'joao@exemplo.com')
        self.assertEqual(pedido.cliente.estado, 'SC')
        self.assertEqual(pedido.itens[0].codigo_produto, 'DSP-A10')
        self.assertEqual(pedido.itens[0].preco_unitario, Decimal('120.00'))

    def test_numeracao_sequencial(self):
        itens = [ItemSolicitado(self.display.id, 1)]
        primeiro = self.use_case.executar('user-1', itens, criar_cliente())
        segundo = self.use_case.executar('user-1', itens, criar_cliente())
        self.assertEqual((primeiro.numero_pedido, segundo.numero_pedido), ('1001', '1002'))

    def test_estoque_insuficiente_nao_grava_nada(self):
        """Cenário: a soma das linhas do mesmo produto excede o estoque."""
        resultado = self.use_case.executar(
            usuario_id='user-1',
            itens=[ItemSolicitado(self.bateria.id, 2), ItemSolicitado(self.bateria.id, 1)],
            cliente=criar_cliente(),
        )

        self.assertFalse(resultado.sucesso)
        self.assertFalse(resultado.erro_interno)
        self.assertEqual(resultado.detalhes, ['Bateria Moto G8: solicitado 3, disponível 2'])
        self.assertEqual(self.pedido_repo.pedidos, [])

    def test_carrinho_vazio(self):
        resultado = self.use_case.executar('user-1', [], criar_cliente())
        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.erro, 'Pedido deve conter ao menos um item.')

    def test_produto_inexistente(self):
        resultado = self.use_case.executar('user-1', [ItemSolicitado('fantasma', 1)], criar_cliente())
        self.assertFalse(resultado.sucesso)
        self.assertIn('fantasma', resultado.erro)
        self.assertEqual(self.pedido_repo.pedidos, [])

    def test_forma_pagamento_invalida(self):
        resultado = self.use_case.executar(
            'user-1', [ItemSolicitado(self.display.id, 1)], criar_cliente(), forma_pagamento='BITCOIN'
        )
        self.assertFalse(resultado.sucesso)
        self.assertIn('BITCOIN', resultado.erro)

    def test_colisao_de_numero_e_repetida(self):
        """Cenário: o número calculado já foi gravado por outra requisição."""
        pedido_repo = Mock()
        pedido_repo.ultimo_numero_sequencial.return_value = '1010'
        pedido_repo.criar_pedido.side_effect = self._falhar_vezes(2)
        use_case = CriarPedidoUseCase(self.produto_repo, pedido_repo)

        resultado = use_case.executar('user-1', [ItemSolicitado(self.display.id, 1)], criar_cliente())

        self.assertTrue(resultado.sucesso)
        self.assertEqual(resultado.numero_pedido, '1013')
        self.assertEqual(pedido_repo.criar_pedido.call_count, 3)

    def test_numeracao_esgotada(self):
        pedido_repo = Mock()
        pedido_repo.ultimo_numero_sequencial.return_value = None
        pedido_repo.criar_pedido.side_effect = self._falhar_vezes(MAX_TENTATIVAS_NUMERACAO)
        use_case = CriarPedidoUseCase(self.produto_repo, pedido_repo)

        with self.assertLogs('irondistribuidora.core.use_cases', level='ERROR'):
            resultado = use_case.executar('user-1', [ItemSolicitado(self.display.id, 1)], criar_cliente())

        self.assertFalse(resultado.sucesso)
        self.assertTrue(resultado.erro_interno)
        self.assertEqual(pedido_repo.criar_pedido.call_count, MAX_TENTATIVAS_NUMERACAO)

    def test_erro_de_persistencia_nao_e_repetido(self):
        pedido_repo = Mock()
        pedido_repo.ultimo_numero_sequencial.return_value = None
        pedido_repo.criar_pedido.side_effect = PersistenciaError('conexão perdida')
        use_case = CriarPedidoUseCase(self.produto_repo, pedido_repo)

        resultado = use_case.executar('user-1', [ItemSolicitado(self.display.id, 1)], criar_cliente())

        self.assertFalse(resultado.sucesso)
        self.assertTrue(resultado.erro_interno)
        self.assertEqual(resultado.erro, 'Erro ao criar pedido')
        pedido_repo.criar_pedido.assert_called_once()

    def test_pedidos_concorrentes_recebem_numeros_distintos(self):
        produto = criar_produto(codigo='TMP-1', quantidade_estoque=1000)
        self.produto_repo.adicionar(produto)
        quantidade = MAX_TENTATIVAS_NUMERACAO
        barreira = threading.Barrier(quantidade)
        resultados = []

        def comprar():
            barreira.wait()
            resultados.append(self.use_case.executar('user-1', [ItemSolicitado(produto.id, 1)], criar_cliente()))

        threads = [threading.Thread(target=comprar) for _ in range(quantidade)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertTrue(all(r.sucesso for r in resultados))
        numeros = {r.numero_pedido for r in resultados}
        self.assertEqual(len(numeros), quantidade)
        self.assertEqual(len(self.pedido_repo.pedidos), quantidade)

    @staticmethod
    def _falhar_vezes(vezes):
        chamadas = {'n': 0}

        def criar_pedido(pedido):
            chamadas['n'] += 1
            if chamadas['n'] <= vezes:
                raise NumeroPedidoDuplicadoError(pedido.numero_pedido)
            return pedido

        return criar_pedido


# ====================================================================
# CRIAÇÃO DE PEDIDO (ADMIN)
# ====================================================================

class TestCriarPedidoAdmin(unittest.TestCase):

    def setUp(self):
        self.produto = criar_produto(quantidade_estoque=0, em_estoque=False)
        self.usuario = Usuario(
            nome='Assistência Central',
            email='central@exemplo.com',
            telefone='48999990000',
            endereco=Endereco(linha1='Av. Antiga, 1', cidade='Joinville', estado='SC', cep='89200-000'),
        )
        self.produto_repo = ProdutoRepositoryMemoria([self.produto])
        self.pedido_repo = PedidoRepositoryMemoria()
        self.usuario_repo = UsuarioRepositoryMemoria([self.usuario])
        self.agora = datetime(2024, 5, 10, 14, 30)
        self.use_case = CriarPedidoAdminUseCase(
            self.produto_repo, self.pedido_repo, self.usuario_repo, relogio=lambda: self.agora
        )

    def test_pedido_admin_ignora_estoque_e_usa_prefixo(self):
        resultado = self.use_case.executar(self.usuario.id, [ItemSolicitado(self.produto.id, 3)])

        self.assertTrue(resultado.sucesso)
        self.assertEqual(resultado.numero_pedido, gerar_numero_admin(self.agora))
        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.cliente.cidade, 'Joinville')
        self.assertEqual(pedido.data_criacao, self.agora)
        self.assertFalse(pedido.mensagem_whatsapp_enviada)

    def test_data_e_status_informados(self):
        historica = datetime(2023, 1, 2, 9, 0)
        resultado = self.use_case.executar(
            self.usuario.id, [ItemSolicitado(self.produto.id, 1)],
            status='delivered', forma_pagamento='cash', data_criacao=historica,
        )
        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.status, 'DELIVERED')
        self.assertEqual(pedido.forma_pagamento, 'CASH')
        self.assertEqual(pedido.data_criacao, historica)

    def test_endereco_novo_vai_para_o_snapshot_e_para_o_perfil(self):
        novo = Endereco(linha1='Rua Nova, 99', cidade='Blumenau', estado='SC', cep='89010-000')
        resultado = self.use_case.executar(self.usuario.id, [ItemSolicitado(self.produto.id, 1)], novo_endereco=novo)

        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.cliente.endereco_linha1, 'Rua Nova, 99')
        self.assertEqual(self.usuario_repo.buscar_por_id(self.usuario.id).endereco.cidade, 'Blumenau')

    def test_falha_no_perfil_nao_desfaz_pedido(self):
        usuario_repo = Mock()
        usuario_repo.buscar_por_id.return_value = self.usuario
        usuario_repo.atualizar_endereco.side_effect = PersistenciaError()
        use_case = CriarPedidoAdminUseCase(self.produto_repo, self.pedido_repo, usuario_repo)

        with self.assertLogs('irondistribuidora.core.use_cases', level='ERROR'):
            resultado = use_case.executar(
                self.usuario.id, [ItemSolicitado(self.produto.id, 1)], novo_endereco=Endereco(linha1='X')
            )

        self.assertTrue(resultado.sucesso)
        self.assertEqual(len(self.pedido_repo.pedidos), 1)

    def test_usuario_removido_antes_do_perfil_nao_desfaz_pedido(self):
        usuario_repo = Mock()
        usuario_repo.buscar_por_id.return_value = self.usuario
        usuario_repo.atualizar_endereco.side_effect = UsuarioNaoEncontradoError()
        use_case = CriarPedidoAdminUseCase(self.produto_repo, self.pedido_repo, usuario_repo)

        with self.assertLogs('irondistribuidora.core.use_cases', level='ERROR'):
            resultado = use_case.executar(
                self.usuario.id, [ItemSolicitado(self.produto.id, 1)], novo_endereco=Endereco(linha1='X')
            )

        self.assertTrue(resultado.sucesso)
        self.assertFalse(resultado.erro_interno)
        self.assertEqual(len(self.pedido_repo.pedidos), 1)

    def test_usuario_inexistente(self):
        resultado = self.use_case.executar('ninguem', [ItemSolicitado(self.produto.id, 1)])
        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.erro, 'Usuário não encontrado')

    def test_status_invalido(self):
        resultado = self.use_case.executar(self.usuario.id, [ItemSolicitado(self.produto.id, 1)], status='PERDIDO')
        self.assertFalse(resultado.sucesso)
        self.assertEqual(self.pedido_repo.pedidos, [])

    def test_numeracao_do_cliente_ignora_pedidos_admin(self):
        self.use_case.executar(self.usuario.id, [ItemSolicitado(self.produto.id, 1)])
        self.assertIsNone(self.pedido_repo.ultimo_numero_sequencial())


# ====================================================================
# PEDIDOS DO CLIENTE E ADMINISTRAÇÃO
# ====================================================================

class TestPedidosExistentes(unittest.TestCase):

    def setUp(self):
        self.produto = criar_produto()
        self.pedido_repo = PedidoRepositoryMemoria()
        criar = CriarPedidoUseCase(ProdutoRepositoryMemoria([self.produto]), self.pedido_repo)
        self.pedido_id = criar.executar('dono', [ItemSolicitado(self.produto.id, 1)], criar_cliente()).pedido_id

    def test_detalhe_apenas_para_o_dono(self):
        use_case = DetalharPedidoDoUsuarioUseCase(self.pedido_repo)
        self.assertEqual(use_case.executar('dono', self.pedido_id).id, self.pedido_id)
        with self.assertRaises(AcessoNegadoError):
            use_case.executar('intruso', self.pedido_id)
        with self.assertRaises(PedidoNaoEncontradoError):
            use_case.executar('dono', 'nao-existe')

    def test_cancelar_pedido_pendente(self):
        pedido = CancelarPedidoUseCase(self.pedido_repo).executar('dono', self.pedido_id)
        self.assertEqual(pedido.status, 'CANCELLED')

    def test_cancelar_pedido_confirmado_falha(self):
        self.pedido_repo.atualizar_status(self.pedido_id, 'CONFIRMED')
        with self.assertRaises(CancelamentoNaoPermitidoError):
            CancelarPedidoUseCase(self.pedido_repo).executar('dono', self.pedido_id)

    def test_admin_atualiza_status_e_pagamento(self):
        use_case = GerenciarPedidosAdminUseCase(self.pedido_repo)
        self.assertEqual(use_case.atualizar_status(self.pedido_id, 'shipped').status, 'SHIPPED')
        self.assertEqual(use_case.atualizar_forma_pagamento(self.pedido_id, 'credit_card').forma_pagamento, 'CREDIT_CARD')

    def test_admin_valores_invalidos(self):
        use_case = GerenciarPedidosAdminUseCase(self.pedido_repo)
        with self.assertRaises(StatusInvalidoError):
            use_case.atualizar_status(self.pedido_id, 'PERDIDO')
        with self.assertRaises(FormaPagamentoInvalidaError):
            use_case.atualizar_forma_pagamento(self.pedido_id, 'BOLETO')
        with self.assertRaises(PedidoNaoEncontradoError):
            use_case.atualizar_status('nao-existe', 'SHIPPED')

    def test_admin_listagem_paginada(self):
        use_case = GerenciarPedidosAdminUseCase(self.pedido_repo)
        pagina = use_case.listar_todos(status='all', pagina=1, limite=500)
        self.assertEqual(pagina.total, 1)
        self.assertEqual(pagina.limite, GerenciarPedidosAdminUseCase.LIMITE_MAXIMO)
        self.assertEqual(use_case.listar_todos(status='CANCELLED').total, 0)
        self.assertEqual(use_case.listar_todos(busca='joão').total, 1)


if __name__ == '__main__':
    unittest.main()
