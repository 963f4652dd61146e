DEFAULT_LANGUAGES = [
    ("en", "English"),
    ("fr", "French"),
    ("es", "Spanish"),
    ("de", "German"),
    ("it", "Italian"),
    ("zh", "Chinese"),
]

DEFAULT_TAGS = [
    "mobile",
    "desktop",
    "web",
    "admin",
    "user",
    "error",
    "success",
    "notification",
    "button",
    "form",
]

FALLBACK_LANGUAGE = "en"

# prefix -> item -> language code -> value
SAMPLE_VALUES = {
    "common": {
        "save": {
            "en": "Save changes",
            "fr": "Enregistrer les modifications",
            "es": "Guardar cambios",
            "de": "Änderungen speichern",
            "it": "Salva modifiche",
            "zh": "保存更改",
        },
        "cancel": {
            "en": "Cancel",
            "fr": "Annuler",
            "es": "Cancelar",
            "de": "Abbrechen",
            "it": "Annulla",
            "zh": "取消",
        },
        "delete": {
            "en": "Delete",
            "fr": "Supprimer",
            "es": "Eliminar",
            "de": "Löschen",
            "it": "Elimina",
            "zh": "删除",
        },
        "confirm": {
            "en": "Are you sure?",
            "fr": "Êtes-vous sûr ?",
            "es": "¿Está seguro?",
            "de": "Sind Sie sicher?",
            "it": "Sei sicuro?",
            "zh": "您确定吗？",
        },
        "yes": {
            "en": "Yes",
            "fr": "Oui",
            "es": "Sí",
            "de": "Ja",
            "it": "Sì",
            "zh": "是",
        },
        "no": {
            "en": "No",
            "fr": "Non",
            "es": "No",
            "de": "Nein",
            "it": "No",
            "zh": "否",
        },
        "success": {
            "en": "Success!",
            "fr": "Succès !",
            "es": "¡Éxito!",
            "de": "Erfolg!",
            "it": "Successo!",
            "zh": "成功！",
        },
        "error": {
            "en": "Error occurred",
            "fr": "Une erreur est survenue",
            "es": "Ha ocurrido un error",
            "de": "Fehler aufgetreten",
            "it": "Si è verificato un errore",
            "zh": "发生错误",
        },
    },
    "auth": {
        "signin": {
            "en": "Please sign in",
            "fr": "Veuillez vous connecter",
            "es": "Por favor, inicie sesión",
            "de": "Bitte anmelden",
            "it": "Accedi",
            "zh": "请登录",
        },
        "forgot_password": {
            "en": "Forgot password?",
            "fr": "Mot de passe oublié ?",
            "es": "¿Olvidó su contraseña?",
            "de": "Passwort vergessen?",
            "it": "Password dimenticata?",
            "zh": "忘记密码？",
        },
        "register": {
            "en": "Register now",
            "fr": "Inscrivez-vous maintenant",
            "es": "Regístrese ahora",
            "de": "Jetzt registrieren",
            "it": "Registrati ora",
            "zh": "立即注册",
        },
        "invalid_credentials": {
            "en": "Invalid credentials",
            "fr": "Identifiants invalides",
            "es": "Credenciales inválidas",
            "de": "Ungültige Anmeldedaten",
            "it": "Credenziali non valide",
            "zh": "无效的凭据",
        },
        "welcome_back": {
            "en": "Welcome back",
            "fr": "Bon retour",
            "es": "Bienvenido de nuevo",
            "de": "Willkommen zurück",
            "it": "Bentornato",
            "zh": "欢迎回来",
        },
    },
    "errors": {
        "not_found": {
            "en": "Page not found",
            "fr": "Page non trouvée",
            "es": "Página no encontrada",
            "de": "Seite nicht gefunden",
            "it": "Pagina non trovata",
            "zh": "找不到页面",
        },
        "server_error": {
            "en": "Server error",
            "fr": "Erreur serveur",
            "es": "Error del servidor",
            "de": "Serverfehler",
            "it": "Errore del server",
            "zh": "服务器错误",
        },
        "access_denied": {
            "en": "Access denied",
            "fr": "Accès refusé",
            "es": "Acceso denegado",
            "de": "Zugriff verweigert",
            "it": "Accesso negato",
            "zh": "访问被拒绝",
        },
        "invalid_input": {
            "en": "Invalid input",
            "fr": "Entrée invalide",
            "es": "Entrada inválida",
            "de": "Ungültige Eingabe",
            "it": "Input non valido",
            "zh": "输入无效",
        },
        "try_again": {
            "en": "Please try again",
            "fr": "Veuillez réessayer",
            "es": "Por favor, inténtelo de nuevo",
            "de": "Bitte versuchen Sie es erneut",
            "it": "Per favore riprova",
            "zh": "请重试",
        },
    },
}
