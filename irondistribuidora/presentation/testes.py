from datetime import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from irondistribuidora.catalog.models import Produto
from irondistribuidora.vendas.models import Pedido


def criar_produtos():
    return [
        Produto.objects.create(codigo='DSP-A10', nome='Display A10', marca='Samsung', categoria='display',
                               modelo='A10', preco=Decimal('110.00'), quantidade_estoque=5, em_estoque=True),
        Produto.objects.create(codigo='BAT-G8', nome='Bateria G8', marca='Motorola', categoria='battery',
                               modelo='G8', preco=Decimal('45.50'), quantidade_estoque=1, em_estoque=True),
        Produto.objects.create(codigo='TMP-K62', nome='Tampa K62', marca='LG', categoria='back_cover',
                               modelo='K62', preco=Decimal('39.90'), quantidade_estoque=0, em_estoque=False),
    ]


def corpo_checkout(itens):
    return {
        'items': itens,
        'customer': {
            'name': 'Loja Centro',
            'email': 'Centro@Exemplo.com',
            'phone': '(48) 99999-0000',
            'addressLine1': 'Rua A, 1',
            'city': 'Florianópolis',
            'state': 'sc',
            'postalCode': '88000-000',
        },
        'notes': 'Entregar pela manhã',
        'paymentMethod': 'PIX',
    }


class CatalogoAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.display, self.bateria, self.tampa = criar_produtos()

    def test_catalogo_publico_por_relevancia(self):
        response = self.client.get(reverse('api_catalogo'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        codigos = [p['code'] for p in response.data['products']]
        # Sem estoque sempre por último
        self.assertEqual(codigos[-1], 'TMP-K62')
        self.assertEqual(response.data['pagination']['total'], 3)
        self.assertEqual(response.data['products'][0]['priceFormatted'][:2], 'R$')

    def test_filtros_e_ordenacao(self):
        response = self.client.get(reverse('api_catalogo'), {'brand': 'Samsung,Motorola', 'sort': 'price_asc'})
        self.assertEqual([p['code'] for p in response.data['products']], ['BAT-G8', 'DSP-A10'])

        response = self.client.get(reverse('api_catalogo'), {'inStock': 'true', 'search': 'tampa'})
        self.assertEqual(response.data['products'], [])

    @override_settings(ITENS_POR_PAGINA=2)
    def test_paginacao_ajusta_pagina(self):
        response = self.client.get(reverse('api_catalogo'), {'page': 9})
        paginacao = response.data['pagination']
        self.assertEqual(paginacao['page'], 2)
        self.assertEqual(paginacao['totalPages'], 2)
        self.assertEqual(paginacao['pages'], [1, 2])
        self.assertEqual(len(response.data['products']), 1)

    def test_parametro_invalido(self):
        response = self.client.get(reverse('api_catalogo'), {'brand': 'Nokia'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detalhe_e_opcoes(self):
        response = self.client.get(reverse('api_detalhe_produto', args=[self.display.id]))
        self.assertEqual(response.data['name'], 'Display A10')

        opcoes = self.client.get(reverse('api_catalogo_opcoes')).data
        self.assertIn({'key': 'LG', 'label': 'LG'}, opcoes['brands'])
        self.assertEqual(opcoes['categories'][0]['key'], 'display')

    def test_data_de_reposicao_no_fuso_local(self):
        # 22h em São Paulo já é o dia seguinte em UTC
        self.tampa.data_reposicao = timezone.make_aware(datetime(2025, 12, 26, 22, 0))
        self.tampa.save()

        response = self.client.get(reverse('api_detalhe_produto', args=[self.tampa.id]))

        self.assertEqual(response.data['restockDate'], '26/12/2025')


class PedidosAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.display, self.bateria, self.tampa = criar_produtos()
        Usuario = get_user_model()
        self.aprovado = Usuario.objects.create_user(email='aprovado@exemplo.com', password='x', nome='Aprovado',
                                                    aprovado=True)
        self.pendente = Usuario.objects.create_user(email='pendente@exemplo.com', password='x', nome='Pendente')

    def _checkout(self, itens):
        return self.client.post(reverse('api_pedidos'), corpo_checkout(itens), format='json')

    def test_anonimo_nao_compra(self):
        response = self._checkout([{'productId': str(self.display.id), 'quantity': 1}])
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_usuario_nao_aprovado(self):
        self.client.force_authenticate(self.pendente)
        response = self._checkout([{'productId': str(self.display.id), 'quantity': 1}])
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Pedido.objects.count(), 0)

    def test_checkout_com_sucesso(self):
        self.client.force_authenticate(self.aprovado)
        # O preço enviado pelo cliente é ignorado
        response = self._checkout([{'productId': str(self.display.id), 'quantity': 2, 'price': '0.01'}])

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['orderNumber'], '1001')
        self.assertTrue(response.data['whatsappUrl'].startswith('https://wa.me/'))
        self.assertIn('#1001', response.data['whatsappMessage'])
        self.assertIn('(Samsung - A10)', response.data['whatsappMessage'])

        pedido = Pedido.objects.get(pk=response.data['orderId'])
        self.assertEqual(pedido.total, Decimal('220.00'))
        self.assertEqual(pedido.email_cliente, 'centro@exemplo.com')
        self.assertEqual(pedido.estado, 'SC')
        self.assertEqual(pedido.usuario, self.aprovado)

    def test_estoque_insuficiente(self):
        self.client.force_authenticate(self.aprovado)
        response = self._checkout([{'productId': str(self.bateria.id), 'quantity': 3}])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['details'], ['Bateria G8: solicitado 3, disponível 1'])
        self.assertEqual(Pedido.objects.count(), 0)

    def test_corpo_invalido(self):
        self.client.force_authenticate(self.aprovado)
        response = self._checkout([])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('items', response.data['fields'])

        corpo = corpo_checkout([{'productId': str(self.display.id), 'quantity': 1}])
        corpo['customer']['email'] = 'invalido'
        response = self.client.post(reverse('api_pedidos'), corpo, format='json')
        self.assertIn('email', response.data['fields']['customer'])

    def test_produto_inexistente(self):
        self.client.force_authenticate(self.aprovado)
        response = self._checkout([{'productId': '00000000-0000-0000-0000-000000000000', 'quantity': 1}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Produto não encontrado', response.data['error'])

    def test_listar_detalhar_e_cancelar(self):
        self.client.force_authenticate(self.aprovado)
        pedido_id = self._checkout([{'productId': str(self.display.id), 'quantity': 1}]).data['orderId']

        lista = self.client.get(reverse('api_pedidos'))
        self.assertEqual([p['orderNumber'] for p in lista.data['orders']], ['1001'])

        detalhe = self.client.get(reverse('api_detalhe_pedido', args=[pedido_id]))
        self.assertEqual(detalhe.data['statusLabel'], 'Pendente')
        self.assertEqual(detalhe.data['items'][0]['productCode'], 'DSP-A10')

        cancelado = self.client.post(reverse('api_cancelar_pedido', args=[pedido_id]))
        self.assertEqual(cancelado.data['status'], 'CANCELLED')

        de_novo = self.client.post(reverse('api_cancelar_pedido', args=[pedido_id]))
        self.assertEqual(de_novo.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pedido_de_outro_usuario(self):
        self.client.force_authenticate(self.aprovado)
        pedido_id = self._checkout([{'productId': str(self.display.id), 'quantity': 1}]).data['orderId']

        self.client.force_authenticate(self.pendente)
        response = self.client.get(reverse('api_detalhe_pedido', args=[pedido_id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.get(reverse('api_detalhe_pedido', args=['00000000-0000-0000-0000-000000000000']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AdminPedidosAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.display, self.bateria, self.tampa = criar_produtos()
        Usuario = get_user_model()
        self.admin = Usuario.objects.create_superuser(email='admin@exemplo.com', password='x', nome='Admin')
        self.cliente = Usuario.objects.create_user(
            email='cliente@exemplo.com', password='x', nome='Cliente', aprovado=True,
            endereco_linha1='Rua Velha, 1', cidade='Joinville', estado='SC', cep='89200-000',
        )

    def test_apenas_staff(self):
        self.client.force_authenticate(self.cliente)
        response = self.client.get(reverse('api_admin_pedidos'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_criar_pedido_manual_sem_checar_estoque(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse('api_admin_pedidos'), {
            'userId': str(self.cliente.id),
            'items': [{'productId': str(self.tampa.id), 'quantity': 4}],
            'status': 'DELIVERED',
            'paymentMethod': 'CASH',
            'createdAt': '2024-01-15T10:00:00-03:00',
            'newAddress': {'addressLine1': 'Rua Nova, 2', 'city': 'Blumenau', 'state': 'SC', 'postalCode': '89010000'},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['orderNumber'].startswith('ADM-'))
        pedido = Pedido.objects.get(pk=response.data['orderId'])
        self.assertEqual(pedido.status, 'DELIVERED')
        self.assertEqual(pedido.cidade, 'Blumenau')
        self.assertEqual(pedido.data_criacao.year, 2024)
        self.cliente.refresh_from_db()
        self.assertEqual(self.cliente.cidade, 'Blumenau')

    def test_criar_pedido_para_usuario_inexistente(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse('api_admin_pedidos'), {
            'userId': '00000000-0000-0000-0000-000000000000',
            'items': [{'productId': str(self.display.id), 'quantity': 1}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Usuário não encontrado')

    def test_listar_e_atualizar(self):
        self.client.force_authenticate(self.admin)
        pedido_id = self.client.post(reverse('api_admin_pedidos'), {
            'userId': str(self.cliente.id),
            'items': [{'productId': str(self.display.id), 'quantity': 1}],
        }, format='json').data['orderId']

        lista = self.client.get(reverse('api_admin_pedidos'), {'status': 'PENDING', 'search': 'cliente@'})
        self.assertEqual(lista.data['pagination']['total'], 1)

        response = self.client.patch(reverse('api_admin_detalhe_pedido', args=[pedido_id]),
                                     {'status': 'SHIPPED'}, format='json')
        self.assertEqual(response.data['status'], 'SHIPPED')

        response = self.client.patch(reverse('api_admin_pagamento_pedido', args=[pedido_id]),
                                     {'paymentMethod': 'DEBIT_CARD'}, format='json')
        self.assertEqual(response.data['paymentMethodLabel'], 'Cartão de Débito')

        response = self.client.patch(reverse('api_admin_pagamento_pedido', args=[pedido_id]),
                                     {'paymentMethod': 'BOLETO'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pedido_inexistente(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse('api_admin_detalhe_pedido', args=['00000000-0000-0000-0000-000000000000']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
