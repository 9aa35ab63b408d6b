from datetime import datetime
from decimal import Decimal
from io import StringIO
from urllib.parse import unquote

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, SimpleTestCase

from irondistribuidora.catalog.models import Produto as ProdutoModel
from irondistribuidora.vendas.models import Pedido as PedidoModel, ItemPedido as ItemPedidoModel
from irondistribuidora.infrastructure.repositories import (
    ProdutoRepositoryDjango,
    PedidoRepositoryDjango,
    UsuarioRepositoryDjango,
)
from irondistribuidora.infrastructure.gateways import WhatsAppLinkGateway
from irondistribuidora.core.entities import (
    Produto, Pedido, ItemPedido, DadosCliente, Endereco,
)
from irondistribuidora.core.exceptions import (
    NumeroPedidoDuplicadoError,
    PedidoNaoEncontradoError,
    UsuarioNaoEncontradoError,
)


def novo_pedido(numero, itens, usuario_id=None, **campos):
    return Pedido(
        numero_pedido=numero,
        cliente=DadosCliente(nome='Loja Centro', email='centro@exemplo.com', telefone='48999990000',
                             cidade='Florianópolis', estado='SC'),
        itens=itens,
        usuario_id=usuario_id,
        **campos,
    )


class ProdutoRepositoryTestCase(TestCase):

    def setUp(self):
        self.repository = ProdutoRepositoryDjango()
        self.model = ProdutoModel.objects.create(
            codigo='DSP-A10', nome='Display A10', marca='Samsung', categoria='display',
            modelo='A10', preco=Decimal('110.00'), quantidade_estoque=3, em_estoque=True, tags=['oled'],
        )

    def test_buscar_por_id(self):
        produto = self.repository.buscar_por_id(str(self.model.id))
        self.assertIsInstance(produto, Produto)
        self.assertEqual(produto.codigo, 'DSP-A10')
        self.assertEqual(produto.tags, ['oled'])

    def test_id_invalido_ou_inexistente(self):
        self.assertIsNone(self.repository.buscar_por_id('nao-e-uuid'))
        self.assertIsNone(self.repository.buscar_por_id('00000000-0000-0000-0000-000000000000'))

    def test_buscar_por_ids_ignora_ausentes(self):
        produtos = self.repository.buscar_por_ids([str(self.model.id), 'lixo'])
        self.assertEqual([p.id for p in produtos], [str(self.model.id)])

    def test_salvar_atualiza_existente(self):
        produto = self.repository.buscar_por_id(str(self.model.id))
        produto.preco = Decimal('99.90')
        self.repository.salvar(produto)
        self.model.refresh_from_db()
        self.assertEqual(self.model.preco, Decimal('99.90'))
        self.assertEqual(ProdutoModel.objects.count(), 1)


class PedidoRepositoryTestCase(TestCase):

    def setUp(self):
        self.repository = PedidoRepositoryDjango()
        self.produto = ProdutoModel.objects.create(
            codigo='BAT-G8', nome='Bateria G8', marca='Motorola', categoria='battery',
            modelo='G8', preco=Decimal('45.50'), quantidade_estoque=10, em_estoque=True,
        )
        self.usuario = get_user_model().objects.create_user(email='dono@exemplo.com', password='x', nome='Dono')

    def _itens(self, quantidade=2):
        return [ItemPedido(
            produto_id=str(self.produto.id), codigo_produto='BAT-G8', nome_produto='Bateria G8',
            quantidade=quantidade, preco_unitario=Decimal('45.50'),
        )]

    def test_criar_pedido_grava_itens_e_total(self):
        pedido = self.repository.criar_pedido(novo_pedido('1001', self._itens(), str(self.usuario.id)))

        self.assertEqual(pedido.numero_pedido, '1001')
        self.assertEqual(pedido.total, Decimal('91.00'))
        self.assertEqual(pedido.usuario_id, str(self.usuario.id))
        self.assertEqual(PedidoModel.objects.get(pk=pedido.id).total, Decimal('91.00'))
        self.assertEqual(ItemPedidoModel.objects.filter(pedido_id=pedido.id).count(), 1)

    def test_numero_duplicado_nao_grava_nada(self):
        """Cenário: colisão de número; o segundo pedido não pode deixar itens órfãos."""
        self.repository.criar_pedido(novo_pedido('1001', self._itens()))

        with self.assertRaises(NumeroPedidoDuplicadoError):
            self.repository.criar_pedido(novo_pedido('1001', self._itens(5)))

        self.assertEqual(PedidoModel.objects.count(), 1)
        self.assertEqual(ItemPedidoModel.objects.count(), 1)

    def test_ultimo_numero_e_comparacao_numerica(self):
        self.assertIsNone(self.repository.ultimo_numero_sequencial())
        for numero in ('999', '1001', 'ADM-99999999'):
            self.repository.criar_pedido(novo_pedido(numero, self._itens()))
        # '999' > '1001' em texto; o maior numérico é 1001 e o ADM- é ignorado
        self.assertEqual(self.repository.ultimo_numero_sequencial(), '1001')

    def test_data_criacao_informada_e_preservada(self):
        historica = datetime(2023, 4, 1, 10, 0)
        pedido = self.repository.criar_pedido(novo_pedido('ADM-00000001', self._itens(), data_criacao=historica))
        self.assertEqual(pedido.data_criacao.date(), historica.date())

    def test_listar_por_usuario(self):
        self.repository.criar_pedido(novo_pedido('1001', self._itens(), str(self.usuario.id)))
        self.repository.criar_pedido(novo_pedido('1002', self._itens()))
        pedidos = self.repository.listar_pedidos_por_usuario(str(self.usuario.id))
        self.assertEqual([p.numero_pedido for p in pedidos], ['1001'])
        self.assertEqual(self.repository.listar_pedidos_por_usuario('lixo'), [])

    def test_listar_todos_com_filtros(self):
        for numero in ('1001', '1002', '1003'):
            self.repository.criar_pedido(novo_pedido(numero, self._itens()))
        pedido = self.repository.listar_todos_pedidos(busca='1002')[0][0]
        self.repository.atualizar_status(pedido.id, 'SHIPPED')

        pedidos, total = self.repository.listar_todos_pedidos(pagina=2, limite=2)
        self.assertEqual(total, 3)
        self.assertEqual(len(pedidos), 1)
        self.assertEqual(self.repository.listar_todos_pedidos(status='SHIPPED')[1], 1)
        self.assertEqual(self.repository.listar_todos_pedidos(busca='centro@')[1], 3)

    def test_atualizacoes(self):
        pedido = self.repository.criar_pedido(novo_pedido('1001', self._itens()))
        self.assertEqual(self.repository.atualizar_forma_pagamento(pedido.id, 'CASH').forma_pagamento, 'CASH')
        with self.assertRaises(PedidoNaoEncontradoError):
            self.repository.atualizar_status('lixo', 'SHIPPED')

    def test_item_sobrevive_a_exclusao_do_produto(self):
        pedido = self.repository.criar_pedido(novo_pedido('1001', self._itens()))
        self.produto.delete()
        item = self.repository.buscar_por_id(pedido.id).itens[0]
        self.assertIsNone(item.produto_id)
        self.assertEqual(item.nome_produto, 'Bateria G8')


class UsuarioRepositoryTestCase(TestCase):

    def setUp(self):
        self.repository = UsuarioRepositoryDjango()
        self.usuario = get_user_model().objects.create_user(
            email='loja@exemplo.com', password='x', nome='Loja', cidade='Joinville', estado='SC',
        )

    def test_buscar_por_id(self):
        usuario = self.repository.buscar_por_id(str(self.usuario.id))
        self.assertEqual(usuario.endereco.cidade, 'Joinville')
        self.assertIsNone(self.repository.buscar_por_id('lixo'))

    def test_atualizar_endereco(self):
        self.repository.atualizar_endereco(
            str(self.usuario.id), Endereco(linha1='Rua B, 2', cidade='Blumenau', estado='SC', cep='89010-000')
        )
        self.usuario.refresh_from_db()
        self.assertEqual(self.usuario.cidade, 'Blumenau')
        with self.assertRaises(UsuarioNaoEncontradoError):
            self.repository.atualizar_endereco('00000000-0000-0000-0000-000000000000', Endereco())


class WhatsAppLinkGatewayTestCase(SimpleTestCase):

    def setUp(self):
        self.gateway = WhatsAppLinkGateway(numero='5548991147117', site='irondistribuidorasc.com.br')
        self.produto = Produto(codigo='DSP-A10', nome='Display A10', marca='Samsung', categoria='display',
                               modelo='a10', preco=Decimal('110.00'))
        self.pedido = novo_pedido('1001', [ItemPedido(
            produto_id=self.produto.id, codigo_produto='DSP-A10', nome_produto='Display A10',
            quantidade=2, preco_unitario=Decimal('110.00'),
        )], forma_pagamento='CREDIT_CARD')

    def test_mensagem_do_pedido(self):
        mensagem = self.gateway.montar_mensagem_pedido(self.pedido, {self.produto.id: self.produto})
        linhas = mensagem.split('\n')

        self.assertTrue(linhas[0].endswith('Olá, gostaria de finalizar o pedido #1001:'))
        self.assertIn('2x Display A10 (Samsung - A10)', mensagem)
        self.assertIn('Cidade/UF: Florianópolis/SC', mensagem)
        self.assertIn('Pagamento: Cartão de Crédito', mensagem)
        self.assertIn('Observações: -', mensagem)
        self.assertTrue(linhas[-1].endswith('Enviado via site irondistribuidorasc.com.br'))
        self.assertNotIn('', linhas)

    def test_mensagem_sem_numero(self):
        self.pedido.numero_pedido = ''
        self.pedido.forma_pagamento = None
        mensagem = self.gateway.montar_mensagem_pedido(self.pedido)
        self.assertIn('gostaria de fazer um pedido:', mensagem)
        self.assertIn('Pagamento: Não informado', mensagem)
        self.assertIn('2x Display A10', mensagem)

    def test_link_codificado(self):
        link = self.gateway.gerar_link('Olá #1001\nok & fim')
        self.assertTrue(link.startswith('https://wa.me/5548991147117?text='))
        texto = link.split('?text=', 1)[1]
        self.assertNotIn(' ', texto)
        self.assertNotIn('&', texto)
        self.assertEqual(unquote(texto), 'Olá #1001\nok & fim')


class ComandosTestCase(TestCase):

    def test_carga_inicial_e_idempotente(self):
        call_command('load_initial_data', stdout=StringIO())
        total = ProdutoModel.objects.count()
        call_command('load_initial_data', stdout=StringIO())
        self.assertGreater(total, 0)
        self.assertEqual(ProdutoModel.objects.count(), total)

    def test_promover_admin(self):
        usuario = get_user_model().objects.create_user(email='maria@exemplo.com', password='x', nome='Maria')
        call_command('promover_admin', 'MARIA', stdout=StringIO())
        usuario.refresh_from_db()
        self.assertTrue(usuario.is_staff)
        self.assertTrue(usuario.aprovado)

    def test_promover_admin_inexistente(self):
        with self.assertRaises(CommandError):
            call_command('promover_admin', 'ninguem', stdout=StringIO())
