# Configuração da interface administrativa do Django para os modelos da Iron Distribuidora.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from irondistribuidora.infrastructure.models import Usuario
from irondistribuidora.catalog.models import Produto
from irondistribuidora.vendas.models import Pedido, ItemPedido

# ====================================================================
# 1. USUÁRIOS (login por e-mail)
# ====================================================================

@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Usuário sem username: o e-mail é o identificador e o cadastro precisa de aprovação."""

    list_display = ('email', 'nome', 'nome_loja', 'telefone', 'aprovado', 'is_staff')
    list_filter = ('aprovado', 'is_staff', 'is_active')
    list_editable = ('aprovado',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Dados comerciais', {'fields': ('nome', 'telefone', 'documento', 'nome_loja', 'aprovado')}),
        ('Endereço', {'fields': ('endereco_linha1', 'endereco_linha2', 'cidade', 'estado', 'cep')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'nome', 'password1', 'password2', 'aprovado'),
        }),
    )

    search_fields = ('email', 'nome', 'nome_loja', 'documento')
    ordering = ('email',)


# ====================================================================
# 2. PRODUTOS
# ====================================================================

@admin.register(Produto)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ('codigo', 'nome', 'marca', 'categoria', 'modelo', 'preco', 'quantidade_estoque', 'em_estoque')
    list_filter = ('marca', 'categoria', 'em_estoque')
    search_fields = ('codigo', 'nome', 'modelo')
    ordering = ('nome',)
    fieldsets = (
        ('Informações Básicas', {
            'fields': ('codigo', 'nome', 'descricao', 'imagem_url', 'tags')
        }),
        ('Classificação', {
            'fields': ('marca', 'categoria', 'modelo', 'popularidade'),
        }),
        ('Preço e Estoque', {
            'fields': ('preco', 'quantidade_estoque', 'em_estoque', 'data_reposicao'),
        }),
    )


# ====================================================================
# 3. PEDIDOS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Itens do pedido são snapshots: apenas leitura."""
    model = ItemPedido
    readonly_fields = ('codigo_produto', 'nome_produto', 'preco_unitario', 'quantidade', 'total')
    fields = readonly_fields
    extra = 0
    can_delete = False


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('numero_pedido', 'nome_cliente', 'data_criacao', 'total', 'status', 'forma_pagamento')
    list_filter = ('status', 'forma_pagamento', 'data_criacao')
    search_fields = ('numero_pedido', 'nome_cliente', 'email_cliente', 'telefone_cliente')
    date_hierarchy = 'data_criacao'
    inlines = [ItemPedidoInline]

    readonly_fields = (
        'numero_pedido',
        'usuario',
        'total',
        'nome_cliente',
        'email_cliente',
        'telefone_cliente',
        'documento_cliente',
        'endereco_linha1',
        'endereco_linha2',
        'cidade',
        'estado',
        'cep',
        'mensagem_whatsapp_enviada',
        'data_atualizacao',
    )

    def has_add_permission(self, request):
        """Pedidos nascem pelo checkout ou pela API administrativa (numeração garantida)."""
        return False
