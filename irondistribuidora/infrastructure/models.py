# Define os modelos do banco de dados para a camada de infraestrutura (apenas autenticação).
import uuid

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager

# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o email é o identificador único
    para autenticação, em vez dos nomes de usuário.
    """
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('O e-mail deve ser definido')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Cria e salva um Superusuário com o e-mail e senha fornecidos.
        Superusuários já nascem aprovados.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('aprovado', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


# ====================================================================
# MODELO DE USUÁRIO
# ====================================================================

class Usuario(AbstractUser):
    """
    Modelo de Usuário Personalizado que utiliza o campo 'email' como identificador
    principal para login, em vez de 'username'.

    O endereço fica no próprio perfil: é a origem do snapshot dos pedidos
    criados pelo administrador.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Remove o campo username padrão
    username = None

    email = models.EmailField('Endereço de E-mail', unique=True)
    nome = models.CharField('Nome', max_length=255, blank=True)

    # Dados comerciais
    telefone = models.CharField(max_length=30, blank=True, null=True)
    documento = models.CharField('CPF/CNPJ', max_length=20, blank=True, null=True)
    nome_loja = models.CharField('Nome da Loja', max_length=255, blank=True, null=True)

    # Endereço
    endereco_linha1 = models.CharField('Endereço', max_length=255, blank=True, null=True)
    endereco_linha2 = models.CharField('Complemento', max_length=255, blank=True, null=True)
    cidade = models.CharField(max_length=100, blank=True, null=True)
    estado = models.CharField('UF', max_length=2, blank=True, null=True)
    cep = models.CharField('CEP', max_length=20, blank=True, null=True)

    # Apenas usuários aprovados podem fazer pedidos
    aprovado = models.BooleanField('Aprovado', default=False)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['nome']

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'infra_usuario'

    def __str__(self):
        return self.email

    @property
    def nome_exibicao(self):
        return self.nome or self.get_full_name() or self.email
