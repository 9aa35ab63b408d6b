from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db.models import Q


class Command(BaseCommand):
    help = 'Promove um usuário (busca por nome ou e-mail) a administrador'

    def add_arguments(self, parser):
        parser.add_argument('identificador', help='Nome ou e-mail (busca parcial, sem diferenciar maiúsculas)')

    def handle(self, *args, **options):
        Usuario = get_user_model()
        identificador = options['identificador']

        usuario = Usuario.objects.filter(
            Q(nome__icontains=identificador) | Q(email__icontains=identificador)
        ).order_by('date_joined').first()

        if not usuario:
            disponiveis = ', '.join(Usuario.objects.values_list('email', flat=True)[:10])
            raise CommandError(f'Usuário "{identificador}" não encontrado. Usuários disponíveis: {disponiveis or "-"}')

        if usuario.is_staff:
            self.stdout.write(self.style.WARNING(f'Usuário "{usuario.email}" já é administrador.'))
            return

        usuario.is_staff = True
        usuario.aprovado = True
        usuario.save(update_fields=['is_staff', 'aprovado'])
        self.stdout.write(self.style.SUCCESS(f'Usuário "{usuario.email}" promovido a administrador.'))
