from datetime import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from irondistribuidora.catalog.models import Produto


# (codigo, nome, marca, categoria, modelo, preco, quantidade_estoque, popularidade, data_reposicao)
PRODUTOS_INICIAIS = [
    ('DISP-SAM-A02', 'Display Samsung A02', 'Samsung', 'display', 'A02', Decimal('89.90'), 25, 75, None),
    ('DISP-SAM-A03', 'Display Samsung A03', 'Samsung', 'display', 'A03', Decimal('95.50'), 18, 80, None),
    ('DISP-SAM-A10', 'Display Samsung A10', 'Samsung', 'display', 'A10', Decimal('110.00'), 0, 60, '2025-11-10'),
    ('DISP-XIA-REDMI12', 'Display Xiaomi Redmi 12', 'Xiaomi', 'display', 'Redmi 12', Decimal('125.00'), 12, 85, None),
    ('BAT-SAM-A02', 'Bateria Samsung A02', 'Samsung', 'battery', 'A02', Decimal('45.00'), 40, 70, None),
    ('BAT-MOT-G22', 'Bateria Motorola G22', 'Motorola', 'battery', 'Moto G22', Decimal('52.00'), 0, 55, '2025-11-20'),
    ('PLC-IPH-11', 'Placa de Carga iPhone 11', 'iPhone', 'charging_board', 'iPhone 11', Decimal('79.90'), 8, 65, None),
    ('TMP-LG-K62', 'Tampa Traseira LG K62', 'LG', 'back_cover', 'K62', Decimal('39.90'), 15, None, None),
]


class Command(BaseCommand):
    help = 'Carrega produtos iniciais para teste do catálogo'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando dados iniciais...')

        for codigo, nome, marca, categoria, modelo, preco, estoque, popularidade, reposicao in PRODUTOS_INICIAIS:
            data_reposicao = None
            if reposicao:
                data_reposicao = timezone.make_aware(datetime.fromisoformat(reposicao))

            produto, created = Produto.objects.get_or_create(
                codigo=codigo,
                defaults={
                    'nome': nome,
                    'marca': marca,
                    'categoria': categoria,
                    'modelo': modelo,
                    'preco': preco,
                    'quantidade_estoque': estoque,
                    'em_estoque': estoque > 0,
                    'popularidade': popularidade,
                    'data_reposicao': data_reposicao,
                    'imagem_url': '/logo-iron.png',
                }
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criado produto "{produto.nome}"'))

        self.stdout.write(self.style.SUCCESS('Dados iniciais carregados com sucesso!'))
