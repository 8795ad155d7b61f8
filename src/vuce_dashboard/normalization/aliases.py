"""Webhook header spellings per canonical field.

The webhook re-exports Airtable columns, and accented headers arrive in
several encodings ("Observación", "Observaci¢n", "Observaci½n"). Each tuple
is tried in order; the first key holding a non-null value wins.
"""

# Identity
RECORD_ID = ("Cálculo", "C lculo", "Cÿlculo", "Calculo")
GREQ = ("GREQ",)

# Classification
ESTADO = ("Estado",)
OBSERVACION = ("Observación", "Observacion", "Observaci¢n", "Observaci½n")

# Entity
ENTIDAD = ("Entidad",)
NOMBRE_ENTIDAD = ("Nombre Entidad",)
SIGLA = ("SIGLA", "Sigla")
APCO = ("APCO",)
DESCRIPCION_GREQ = ("Descripción GREQ", "Descripci¢n GREQ", "Descripci½n GREQ", "Descripcion GREQ")

# Analysis stage
RESPONSABLE_ANALISIS = ("Responsable ANALISIS", "Responsable ANÁLISIS")
ESTADO_ANALISIS = ("Estado ANALISIS", "Estado ANÁLISIS")
FECHA_INI_ANALISIS = ("Fecha Inicial ANALISIS", "Fecha Inicial ANÁLISIS")
FECHA_FIN_ANALISIS = ("Fecha Final ANALISIS", "Fecha Final ANÁLISIS")

# Development stage
RESPONSABLE_DESARROLLO = ("Responsable DESARROLLO",)
ESTADO_DESARROLLO = ("Estado DESARROLLO",)
FECHA_INI_DESARROLLO = ("Fecha Inicial DESARROLLO",)
FECHA_FIN_DESARROLLO = ("Fecha Final DESARROLLO",)

# Quality control stage
RESPONSABLE_CC = ("Responsable CONTROL DE CALIDAD",)
ESTADO_CC = ("Estado CONTROL DE CALIDAD",)
FECHA_INI_CC = ("Fecha Inicial CONTROL CALIDAD", "Fecha Inicial CONTROL DE CALIDAD")
FECHA_FIN_CC = ("Fecha Final CONTROL CALIDAD", "Fecha Final CONTROL DE CALIDAD")

# Overall dates
FECHA_INICIO = ("Fecha Inicio",)
FECHA_FINAL = ("Fecha Final",)
FECHA_PUBLICACION = ("Fecha Publicación", "Fecha Publicaci¢n", "Fecha Publicaci½n", "Fecha Publicacion")
FECHA_GREQ = ("Fecha GREQ",)
CREATED_TIME = ("createdTime", "Created", "Creado")

# Progress and ordering
PORCENTAJE_AVANCE = ("Porcentaje de avance", "Porcentaje de Avance")
ORDEN = ("Orden",)

# Attachments
ARCHIVO_ADJUNTO = ("Archivo adjunto", "Archivo Adjunto")
